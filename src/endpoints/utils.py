from fastapi import APIRouter


router = APIRouter(
    tags=["utils"],
    responses={404: {"description": "Not found"}},
)


@router.get("/")
async def hello():
    return "Hello from the server!"
