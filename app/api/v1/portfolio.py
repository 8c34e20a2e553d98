# app/api/v1/portfolio.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_optional_principal
from app.core.exceptions import NotFoundError
from app.core.rbac import Principal
from app.crud.user import user_crud
from app.schemas.portfolio import PortfolioOut, ShareLinkOut
from app.services.portfolio import get_portfolio
from app.services.share import qr_png, render_printable, share_url

router = APIRouter()

def _link(request: Request, db: Session, user_id: str) -> str:
    if user_crud.get(db, user_id) is None:
        raise NotFoundError("User", user_id)
    return share_url(str(request.base_url), user_id)

@router.get("/{user_id}", response_model=PortfolioOut)
def read_portfolio(
    user_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
    viewer: Optional[Principal] = Depends(get_optional_principal),
):
    return get_portfolio(db, user_id, viewer)

@router.get("/{user_id}/share", response_model=ShareLinkOut)
def portfolio_share_link(
    request: Request,
    user_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
):
    return ShareLinkOut(url=_link(request, db, user_id))

@router.get("/{user_id}/qr.png", response_class=Response)
def portfolio_qr(
    request: Request,
    user_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
):
    return Response(content=qr_png(_link(request, db, user_id)), media_type="image/png")

@router.get("/{user_id}/print", response_class=HTMLResponse)
def portfolio_print(
    request: Request,
    user_id: str = Path(..., min_length=1),
    db: Session = Depends(get_db),
    viewer: Optional[Principal] = Depends(get_optional_principal),
):
    snapshot = get_portfolio(db, user_id, viewer)
    return HTMLResponse(render_printable(snapshot, share_url(str(request.base_url), user_id)))
