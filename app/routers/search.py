from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.dependencies import get_catalog_repository, get_current_account_id
from app.repositories.catalog import CatalogRepository
from app.schemas.catalog import MovementResponse, SearchResponse, WodResponse

router = APIRouter(tags=["search"])


@router.get("/search", response_model=SearchResponse, response_model_exclude_none=True)
def search(
    q: str = Query(default=""),
    type: Optional[Literal["movements", "wods"]] = Query(default=None),
    account_id: int = Depends(get_current_account_id),
    catalog: CatalogRepository = Depends(get_catalog_repository),
) -> SearchResponse:
    query = q.strip()
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query parameter required",
        )
    response = SearchResponse()
    if type in (None, "movements"):
        response.movements = [
            MovementResponse.model_validate(m)
            for m in catalog.search_movements(account_id, query)
        ]
    if type in (None, "wods"):
        response.wods = [
            WodResponse.model_validate(w) for w in catalog.search_wods(account_id, query)
        ]
    return response
