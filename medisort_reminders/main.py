from fastapi import FastAPI
from medisort_reminders.api.routes_reminders import router as reminders_router
from medisort_reminders.core.logger import setup_logging
from medisort_reminders.core.settings import LOG_FILE, LOG_LEVEL, LOG_TO_FILE, SERVICE_NAME

setup_logging(LOG_LEVEL, LOG_FILE if LOG_TO_FILE else None)

app = FastAPI(title=SERVICE_NAME, version="1.0")

app.include_router(reminders_router)

@app.get("/health")
def health():
    return {"ok": True}
@app.get("/")
def root():
    return {"ok": True, "service": SERVICE_NAME}
