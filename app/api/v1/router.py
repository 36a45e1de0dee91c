from fastapi import APIRouter
from api.v1.routes.messages import router as messages_router


# Main v1 router (includes all endpoints)
router = APIRouter()
router.include_router(messages_router)
