from fastapi import Depends, Header

from core.errors import ValidationError
from stores.documents import DocumentStore
from stores.token_usage import TokenUsageService


def get_documents() -> DocumentStore:
    return DocumentStore()


def get_user_id(x_user_id: str = Header(default="")) -> str:
    user_id = x_user_id.strip()
    if not user_id:
        raise ValidationError("X-User-Id header is required")
    return user_id


def get_token_usage(documents: DocumentStore = Depends(get_documents)) -> TokenUsageService:
    return TokenUsageService(documents)
