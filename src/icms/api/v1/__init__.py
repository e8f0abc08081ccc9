from fastapi import APIRouter

from . import auth, contractors, employees, employers, finance, notifications, people, reference, schedule, travel

api_router = APIRouter()

# People
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(employers.router, prefix="/employers", tags=["employers"])
api_router.include_router(employers.contacts_router, prefix="/employer-contacts", tags=["employers"])
api_router.include_router(contractors.router, prefix="/contractors", tags=["contractors"])
api_router.include_router(contractors.contacts_router, prefix="/contractor-contacts", tags=["contractors"])
api_router.include_router(people.stakeholders_router, prefix="/stakeholders", tags=["stakeholders"])
api_router.include_router(people.task_helpers_router, prefix="/task-helpers", tags=["task-helpers"])
api_router.include_router(people.persons_router, prefix="/persons", tags=["persons"])
api_router.include_router(reference.router, tags=["reference"])

# Scheduling
api_router.include_router(schedule.meetings_router, prefix="/meetings", tags=["meetings"])
api_router.include_router(schedule.tasks_router, prefix="/daily-tasks", tags=["daily-tasks"])

api_router.include_router(finance.router, prefix="/finance", tags=["finance"])
api_router.include_router(travel.router, prefix="/travel", tags=["travel"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
