"""
Response envelope and document serialization utilities
"""
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel


def serialize_doc(doc: Optional[BaseModel]) -> Optional[Dict[str, Any]]:
    """
    Convert a stored document to a JSON-ready dict with camelCase keys

    Args:
        doc: Pydantic document, or None

    Returns:
        Serialized document, or None if input is None
    """
    if doc is None:
        return None
    return doc.model_dump(mode="json", by_alias=True, exclude_none=True)


def serialize_docs(docs: Iterable[BaseModel]) -> List[Dict[str, Any]]:
    """
    Serialize a list of documents

    Args:
        docs: Pydantic documents

    Returns:
        List of serialized documents
    """
    return [serialize_doc(doc) for doc in docs if doc is not None]


def paginate(items: List[Any], limit: int, offset: int) -> List[Any]:
    return items[offset:offset + limit]


def success_response(data: Any = None, message: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """
    Build the success envelope

    Args:
        data: Payload; pydantic models and lists of them are serialized
        message: Optional human-readable message
        extra: Additional top-level keys such as total or count

    Returns:
        {"status": "success", "message"?, "data"?, **extra}
    """
    response: Dict[str, Any] = {"status": "success"}
    if message is not None:
        response["message"] = message
    if isinstance(data, BaseModel):
        data = serialize_doc(data)
    elif isinstance(data, list):
        data = [serialize_doc(d) if isinstance(d, BaseModel) else d for d in data]
    if data is not None:
        response["data"] = data
    response.update(extra)
    return response
