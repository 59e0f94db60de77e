import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.context import build_context
from jobboard.core import config
from jobboard.core.errors import JobBoardError, UnexpectedError
from jobboard.database import Base, engine
from jobboard.models import employer, job_posting, job_seeker, user  # noqa: F401
from jobboard.routes import auth_routes, job_routes, profile_routes
from jobboard.services.profiles import validation_message

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)


def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and credentials.')


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.validate_runtime_config()
    initialize_database()
    app.state.context = build_context()
    yield
    app.state.context.close()


app = FastAPI(title='JobBoard', lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.FRONTEND_ORIGIN],
    allow_credentials=True,
    allow_methods=['GET', 'POST', 'PUT', 'OPTIONS'],
    allow_headers=['Authorization', 'Content-Type'],
)


@app.middleware('http')
async def preflight_no_content(request: Request, call_next):
    response = await call_next(request)
    is_preflight = (
        request.method == 'OPTIONS'
        and 'access-control-request-method' in request.headers
    )
    if is_preflight and response.status_code == 200:
        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() not in {'content-length', 'content-type'}
        }
        return Response(status_code=204, headers=headers)
    return response


@app.exception_handler(JobBoardError)
async def handle_job_board_error(_request: Request, exc: JobBoardError):
    return JSONResponse(status_code=exc.status_code, content={'error': exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(_request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={'error': validation_message(exc)})


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(_request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={'error': exc.detail},
        headers=getattr(exc, 'headers', None),
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return JSONResponse(status_code=500, content={'error': UnexpectedError().message})


@app.get('/', response_class=PlainTextResponse)
def root():
    return 'Welcome to JobBoard!'


app.include_router(auth_routes.router)
app.include_router(profile_routes.router)
app.include_router(job_routes.router)
