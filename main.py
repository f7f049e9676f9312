from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.config import settings
from app.core.database import engine, SessionLocal
from app.core.init_db import create_tables, seed_default_users
from app.core.logging import configure_logging
from app.endpoints import auth, account, course, course_progress, utility
from app.middleware.exceptions import global_exception_handler, http_exception_handler, validation_exception_handler
from app.middleware.logging import RequestLoggingMiddleware

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(auth.router, prefix="/api", tags=["Auth"])
app.include_router(account.router, prefix="/api", tags=["Account"])
app.include_router(course.router, prefix="/api", tags=["Courses"])
app.include_router(course_progress.router, prefix="/api", tags=["Course Progress"])
app.include_router(utility.router, prefix="/api", tags=["utility"])


@app.get("/health", tags=["utility"])
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def startup_event():
    configure_logging()
    create_tables(engine)
    db = SessionLocal()
    try:
        seed_default_users(db)
    finally:
        db.close()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
