from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.auth_utils import require_user
from app.validation import MAX_KEYWORD_LEN
from core.database import add_keyword, delete_keyword, get_keyword_rows_for_user

router = APIRouter(prefix="/api")


class KeywordIn(BaseModel):
    keyword: str


@router.get("/keywords")
def list_keywords(user: dict = Depends(require_user)):
    return get_keyword_rows_for_user(int(user["id"]))


@router.post("/keywords", status_code=201)
def create_keyword(body: KeywordIn, user: dict = Depends(require_user)):
    keyword = (body.keyword or "").strip()
    if not keyword or len(keyword) > MAX_KEYWORD_LEN:
        raise HTTPException(status_code=400, detail="Keyword is required.")
    return add_keyword(user_id=int(user["id"]), keyword=keyword)


@router.delete("/keywords/{keyword_id}")
def remove_keyword(keyword_id: int, user: dict = Depends(require_user)):
    if not delete_keyword(user_id=int(user["id"]), keyword_id=keyword_id):
        raise HTTPException(status_code=404, detail="Keyword not found.")
    return {"success": True}
