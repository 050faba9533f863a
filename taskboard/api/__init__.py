from fastapi import APIRouter
from taskboard.api.tasks import router as tasks_router
from taskboard.api.task_types import router as task_types_router
from taskboard.api.users import router as users_router

router = APIRouter()
router.include_router(tasks_router, prefix="/tasks", tags=["tasks"])
router.include_router(task_types_router,
                      prefix="/task-types", tags=["task-types"])
router.include_router(users_router, prefix="/users", tags=["users"])
