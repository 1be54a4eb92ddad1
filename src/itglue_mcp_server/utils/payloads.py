"""JSON:API Payload Builders

Builders that turn related-item and attachment inputs into the JSON:API
request documents expected by IT Glue's relationship endpoints, plus the
resource path helper shared by every request.

Single vs. batch input is decided by the argument's type:
- a spec model or a mapping is a single input, and ``data`` is one object
- a list or tuple is a batch input, and ``data`` is a list in input order

Batch documents are built all-or-nothing: every entry is validated (and for
attachments, every file read) before a document is returned.
"""

import base64
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..models.attachment import AttachmentSpec
from ..models.document import Relation, RequestDocument, ResourceObject, ResourceType
from ..models.related_item import RelatedItemSpec
from .errors import FileReadError, ValidationError

logger = logging.getLogger(__name__)

RELATED_ITEM_REQUIRED_FIELDS = ("destination_id", "destination_type")
ATTACHMENT_REQUIRED_FIELDS = ("path", "file_name")

RelatedItemInput = Union[RelatedItemSpec, Mapping[str, Any]]
AttachmentInput = Union[AttachmentSpec, Mapping[str, Any]]


def coerce_resource_type(resource_type: Union[str, ResourceType]) -> ResourceType:
    """Return ``resource_type`` as a ResourceType, or raise ValidationError."""
    try:
        return ResourceType(resource_type)
    except ValueError:
        raise ValidationError(
            f"Unknown resource type '{resource_type}'",
            details={"allowed": [t.value for t in ResourceType]}
        )


def _coerce_relation(relation: Union[str, Relation]) -> Relation:
    try:
        return Relation(relation)
    except ValueError:
        raise ValidationError(
            f"Unknown relation '{relation}'",
            details={"allowed": [r.value for r in Relation]}
        )


def _is_int_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_int_id(value: Any, name: str) -> int:
    """Return ``value`` if it is an integer id, or raise ValidationError."""
    if not _is_int_id(value):
        raise ValidationError(
            f"{name} must be an integer, got {type(value).__name__}",
            details={name: repr(value)}
        )
    return value


def relationship_path(
    resource_type: Union[str, ResourceType],
    resource_id: int,
    relation: Union[str, Relation],
    relation_id: Optional[int] = None
) -> str:
    """Build ``/{resource_type}/{resource_id}/relationships/{relation}[/{relation_id}]``.

    Both ids must be integers, so nothing but digits reaches the URL.

    Example:
        >>> relationship_path("passwords", 8675309, "related_items", 42)
        '/passwords/8675309/relationships/related_items/42'
    """
    require_int_id(resource_id, "resource_id")
    if relation_id is not None:
        require_int_id(relation_id, "relation_id")
    path = (
        f"/{coerce_resource_type(resource_type).value}/{resource_id}"
        f"/relationships/{_coerce_relation(relation).value}"
    )
    if relation_id is not None:
        path = f"{path}/{relation_id}"
    return path


def _split_input(value: Any, model: Type[BaseModel], label: str) -> Tuple[bool, List[Any]]:
    """Return (is_batch, entries) for a single or batch input."""
    if isinstance(value, (model, Mapping)):
        return False, [value]
    if isinstance(value, (list, tuple)):
        if not value:
            raise ValidationError(f"At least one {label} must be provided")
        return True, list(value)
    raise ValidationError(
        f"Expected a {label} or a list of them, got {type(value).__name__}"
    )


def _parse_entry(
    entry: Any,
    model: Type[BaseModel],
    required: Sequence[str],
    label: str,
    index: Optional[int] = None
) -> Any:
    """Validate one input entry and return it as ``model``."""
    where = f"{label} at index {index}" if index is not None else label
    if isinstance(entry, model):
        return entry
    if not isinstance(entry, Mapping):
        raise ValidationError(
            f"{where} must be a mapping, got {type(entry).__name__}",
            details={"index": index}
        )

    missing = [field for field in required if field not in entry]
    if missing:
        raise ValidationError(
            f"{where} missing required field(s): {', '.join(missing)}",
            details={"index": index, "missing": missing}
        )

    try:
        return model(**entry)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid {where}: {e.error_count()} validation error(s)",
            details={"index": index, "errors": [err["msg"] for err in e.errors()]}
        ) from e


def _document(relation: Relation, attribute_sets: List[Dict[str, Any]], is_batch: bool) -> RequestDocument:
    objects = [ResourceObject(type=relation.value, attributes=attrs) for attrs in attribute_sets]
    if is_batch:
        return RequestDocument(data=objects)
    return RequestDocument(data=objects[0])


# ============================================================================
# Related items
# ============================================================================

def build_related_items_create(
    items: Union[RelatedItemInput, Sequence[RelatedItemInput]]
) -> RequestDocument:
    """Build the document for creating one or more related items.

    Args:
        items: A RelatedItemSpec (or mapping) for a single link, or a list of
            them for a batch. Mapping entries must contain ``destination_id``
            and ``destination_type``; ``notes`` defaults to "" when the key is
            absent.

    Returns:
        RequestDocument with ``data`` as an object (single) or list (batch).

    Raises:
        ValidationError: If the batch is empty or any entry is invalid
    """
    is_batch, entries = _split_input(items, RelatedItemSpec, "related item")
    specs = [
        _parse_entry(entry, RelatedItemSpec, RELATED_ITEM_REQUIRED_FIELDS, "related item",
                     index if is_batch else None)
        for index, entry in enumerate(entries)
    ]

    logger.debug(f"Built related_items create document: batch={is_batch}, count={len(specs)}")
    return _document(Relation.RELATED_ITEMS, [spec.to_attributes() for spec in specs], is_batch)


def build_related_items_update(resource_id: int, related_item_id: int, notes: str) -> RequestDocument:
    """Build the document for updating the notes of a related item.

    The ids only appear in the request path; the document carries notes only.
    """
    logger.debug(f"Built related_items update document for {resource_id}/{related_item_id}")
    return _document(Relation.RELATED_ITEMS, [{"notes": notes}], is_batch=False)


def build_deletion(
    resource_type: Union[str, ResourceType],
    resource_id: int,
    ids: Union[int, Sequence[int]],
    relation: Union[str, Relation] = Relation.RELATED_ITEMS
) -> RequestDocument:
    """Build the document for deleting related items or attachments.

    Args:
        resource_type: Resource the relations belong to
        resource_id: ID of that resource
        ids: Relation IDs to delete. One ID yields a single object, several
            yield a list in the same order.
        relation: "related_items" (default) or "attachments"

    Raises:
        ValidationError: If no ids are given or any id is not an integer
    """
    coerce_resource_type(resource_type)
    require_int_id(resource_id, "resource_id")
    relation = _coerce_relation(relation)

    if _is_int_id(ids):
        ids = [ids]
    if not isinstance(ids, (list, tuple)):
        raise ValidationError(
            f"Deletion ids must be an integer or a list of integers, got {type(ids).__name__}",
            details={"resource_id": resource_id}
        )
    ids = list(ids)

    if not ids:
        raise ValidationError(
            f"At least one {relation.value} id must be provided for deletion",
            details={"resource_id": resource_id}
        )
    bad = [i for i in ids if not _is_int_id(i)]
    if bad:
        raise ValidationError(
            f"Deletion ids must be integers: {bad}",
            details={"resource_id": resource_id}
        )

    logger.debug(f"Built {relation.value} deletion document for {resource_id}: ids={ids}")
    return _document(relation, [{"id": i} for i in ids], is_batch=len(ids) > 1)


# ============================================================================
# Attachments
# ============================================================================

def read_attachment_content(path: str) -> str:
    """Read a file fully and return its bytes base64-encoded.

    Raises:
        FileReadError: If the file cannot be read
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise FileReadError(
            f"Unable to read attachment file '{path}': {e.strerror or e}",
            details={"path": str(path)}
        ) from e
    return base64.b64encode(raw).decode("ascii")


def build_attachments_create(
    attachments: Union[AttachmentInput, Sequence[AttachmentInput]]
) -> RequestDocument:
    """Build the document for uploading one or more attachments.

    Every entry is validated before any file is read, and every file is read
    before the document is returned.

    Raises:
        ValidationError: If the batch is empty or an entry lacks path/file_name
        FileReadError: If any source file cannot be read
    """
    is_batch, entries = _split_input(attachments, AttachmentSpec, "attachment")
    specs = [
        _parse_entry(entry, AttachmentSpec, ATTACHMENT_REQUIRED_FIELDS, "attachment",
                     index if is_batch else None)
        for index, entry in enumerate(entries)
    ]

    attribute_sets = [
        {"attachment": {"content": read_attachment_content(spec.path), "file_name": spec.file_name}}
        for spec in specs
    ]

    logger.debug(f"Built attachments create document: batch={is_batch}, count={len(specs)}")
    return _document(Relation.ATTACHMENTS, attribute_sets, is_batch)


def build_attachments_update(resource_id: int, attachment_id: int, new_name: str) -> RequestDocument:
    """Build the document for renaming an attachment."""
    logger.debug(f"Built attachments update document for {resource_id}/{attachment_id}")
    return _document(Relation.ATTACHMENTS, [{"name": new_name}], is_batch=False)
