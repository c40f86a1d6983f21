from fastapi import APIRouter, Depends, Request
from sqlalchemy import select, insert, update, delete, literal_column

from src.models.products import products_table
from src.schemas.products import ProductIn, WriteResult, ErrorResponse
from src.utils.db import SharedConnection, StatementResult

router = APIRouter(
    tags=["products"],
    responses={500: {"model": ErrorResponse, "description": "Database error"}},
)


def get_db(request: Request) -> SharedConnection:
    return request.app.state.bootstrap.get_connection()


def _write_result(result: StatementResult) -> WriteResult:
    return WriteResult(affectedRows=result.affected_rows, insertId=result.insert_id)


@router.get("/products")
async def list_products(db: SharedConnection = Depends(get_db)):
    # SELECT *: rows come back with whatever columns the table has.
    return await db.fetch_all(select(literal_column("*")).select_from(products_table))


@router.post("/products", response_model=WriteResult)
async def create_product(product: ProductIn, db: SharedConnection = Depends(get_db)):
    query = insert(products_table).values(**product.model_dump())
    return _write_result(await db.execute(query))


@router.put("/products/{id}", response_model=WriteResult)
async def update_product(id: str, product: ProductIn, db: SharedConnection = Depends(get_db)):
    """
    Overwrites all four fields of the product. An unknown id is not an error,
    the result simply reports zero affected rows.
    """
    query = (
        update(products_table)
        .where(products_table.c.id == id)
        .values(**product.model_dump())
    )
    return _write_result(await db.execute(query))


@router.delete("/products/{id}", response_model=WriteResult)
async def delete_product(id: str, db: SharedConnection = Depends(get_db)):
    query = delete(products_table).where(products_table.c.id == id)
    return _write_result(await db.execute(query))
