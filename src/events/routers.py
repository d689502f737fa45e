from fastapi import APIRouter

from .features.create_event.router import router as create_event_router
from .features.delete_event.router import router as delete_event_router
from .features.get_event.router import router as get_event_router
from .features.list_deleted_events.router import router as list_deleted_events_router
from .features.list_events.router import router as list_events_router
from .features.recover_event.router import router as recover_event_router
from .features.update_event.router import router as update_event_router

router = APIRouter()

router.include_router(create_event_router)
router.include_router(list_events_router)
# before get_event, which would otherwise match /events/deleted
router.include_router(list_deleted_events_router)
router.include_router(get_event_router)
router.include_router(update_event_router)
router.include_router(delete_event_router)
router.include_router(recover_event_router)
