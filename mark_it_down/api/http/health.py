from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Проверка работоспособности сервиса"""
    return {"status": "healthy"}
