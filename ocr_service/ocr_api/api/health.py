from fastapi import APIRouter

router = APIRouter()

@router.get(
    "",
    status_code=200,
    summary="Health check",
    description="Health check endpoint for the OCR service"
)
def health_check():
    return {"status": "ok"}
