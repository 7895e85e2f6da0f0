from fastapi import APIRouter, Depends

from api.deps import get_token_usage, get_user_id
from schemas.common import CommonResponse
from schemas.usage import TokenUsage
from stores.token_usage import TokenUsageService

router = APIRouter()


@router.get("/token-usage", response_model=CommonResponse[TokenUsage])
def token_usage(user_id: str = Depends(get_user_id), usage: TokenUsageService = Depends(get_token_usage)):
    return CommonResponse[TokenUsage](success=True, code="Success", message="Token usage loaded",
                                      data=usage.usage(user_id))
