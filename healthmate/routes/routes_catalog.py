from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..services.content import catalog_store


router = APIRouter(prefix="/api/products", tags=["catalog"])


# Declared before "/{product_id}" so the literal path wins.
@router.get("/recommendations")
def list_recommendations() -> dict:
    return {"code": 200, "message": "success", "data": catalog_store.list_recommendations()}


@router.get("/{product_id}")
def get_product(product_id: str):
    product = catalog_store.get_product(product_id)
    if product is None:
        return JSONResponse(status_code=404, content={"code": 404, "message": "商品不存在", "data": None})
    return {"code": 200, "message": "success", "data": product}
