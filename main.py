import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from quizmaster.core.config import settings
from quizmaster.core.database import Base, engine
from quizmaster.core.errors import QuizAppError, Unauthorized, ValidationError
from quizmaster.core.log_config import configure_logging
from quizmaster.routes.auth.auth_routers import auth_router
from quizmaster.routes.quiz.quiz_routers import quiz_router
from quizmaster.services.email import EmailNotifier

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    app.state.notifier = EmailNotifier.from_settings(settings)
    logger.info("QuizMaster API started (auth_required=%s)", settings.AUTH_REQUIRED)
    yield
    engine.dispose()


app = FastAPI(
    title="Quiz App API",
    description="Quizzes with multiple-choice questions, scoring and email notifications.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(quiz_router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"errors": [{"field": e.field, "message": e.message} for e in exc.errors]},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(Unauthorized)
async def unauthorized_handler(request: Request, exc: Unauthorized):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(QuizAppError)
async def quiz_app_error_handler(request: Request, exc: QuizAppError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})


@app.get("/", response_class=HTMLResponse)
async def read_root():
    return """
    <html>
        <head>
            <title>Quiz App</title>
        </head>
        <body>
            <h1>Quiz App API</h1>
            <p>See the API documentation <a href="/docs">here</a>.</p>
        </body>
    </html>
    """


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
