from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.auth_utils import require_user
from app.validation import MAX_NAME_LEN, is_valid_career_url
from core.database import add_company, delete_company, get_companies_for_user

router = APIRouter(prefix="/api")


class CompanyIn(BaseModel):
    company_name: str
    career_page_url: str


@router.get("/companies")
def list_companies(user: dict = Depends(require_user)):
    return get_companies_for_user(int(user["id"]))


@router.post("/companies", status_code=201)
def create_company(body: CompanyIn, user: dict = Depends(require_user)):
    name = (body.company_name or "").strip()
    url = (body.career_page_url or "").strip()
    if not name or len(name) > MAX_NAME_LEN:
        raise HTTPException(status_code=400, detail="Company name is required.")
    if not is_valid_career_url(url):
        raise HTTPException(status_code=400, detail="Career page URL must be an http(s) URL.")
    return add_company(user_id=int(user["id"]), company_name=name, career_page_url=url)


@router.delete("/companies/{company_id}")
def remove_company(company_id: int, user: dict = Depends(require_user)):
    # Jobs and their notifications go with the company (ON DELETE CASCADE).
    if not delete_company(user_id=int(user["id"]), company_id=company_id):
        raise HTTPException(status_code=404, detail="Company not found.")
    return {"success": True}
