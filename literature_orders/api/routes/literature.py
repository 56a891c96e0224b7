from fastapi import APIRouter, Depends
from typing import List

from ...schemas.literature import LiteratureResponse
from ...services.literature_service import LiteratureService
from ..dependencies import get_literature_service

router = APIRouter(prefix="/literature", tags=["literature"])


@router.get("", response_model=List[LiteratureResponse])
async def list_literature(
        literature_service: LiteratureService = Depends(get_literature_service)
):
    """Каталог литературы в порядке sortOrder"""
    return await literature_service.list_items()
