from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

import bookings
import rooms
from config import get_settings
from database import Store, close_store, get_store, init_store
from errors import VALIDATION_ERROR, NotFoundError, StoreError, error_response
from logger import get_logger, set_level

# ================== SETTINGS ==================
settings = get_settings()
set_level(settings.LOG_LEVEL)
logger = get_logger(__name__)

# ================== DATABASE ==================
init_store(settings)


def prepare_store(store: Store, create_tables: bool) -> None:
    """Fail fast when the database is unreachable instead of serving 500s."""
    store.ping()
    logger.info("Conectado a la base de datos")
    if create_tables:
        store.create_tables()


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        prepare_store(get_store(), settings.CREATE_TABLES)
    except StoreError:
        logger.error("La aplicación no puede iniciar sin base de datos")
        raise
    yield
    close_store()


# ================== APP ==================
app = FastAPI(title="Habitaciones y reservas", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(rooms.router)
app.include_router(bookings.router)


# ================== ERRORS ==================
@app.exception_handler(NotFoundError)
def not_found(request: Request, exc: NotFoundError):
    return error_response(404, str(exc), exc.code)


@app.exception_handler(StoreError)
def store_error(request: Request, exc: StoreError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return error_response(500, "Error al acceder a la base de datos", exc.code)


@app.exception_handler(RequestValidationError)
def validation_error(request: Request, exc: RequestValidationError):
    return error_response(
        422,
        "Los datos enviados no son válidos",
        VALIDATION_ERROR,
        detalle=jsonable_encoder(exc.errors()),
    )


# ================== ROUTES ==================
def _route(metodo: str, descripcion: str, ruta: str) -> dict:
    return {"metodo": metodo, "descripcion": descripcion, "ruta": ruta}


APIS = {
    "habitaciones": {
        "obtener": _route("GET", "Obtener todas las habitaciones", "/rooms"),
        "obtenerPorCodigo": _route("GET", "Obtener una habitación por su código", "/rooms/:codigo"),
        "crear": _route("POST", "Crear una habitación", "/rooms"),
        "actualizar": _route("PATCH", "Actualizar una habitación", "/rooms/:codigo"),
        "eliminar": _route("DELETE", "Eliminar una habitación", "/rooms/:codigo"),
    },
    "reservas": {
        "obtener": _route("GET", "Obtener todas las reservas", "/bookings"),
        "obtenerPorCodigo": _route("GET", "Obtener una reserva por su código", "/bookings/:codigo"),
        "crear": _route("POST", "Crear una reserva", "/bookings"),
        "actualizar": _route("PATCH", "Actualizar una reserva", "/bookings/:codigo"),
        "eliminar": _route("DELETE", "Eliminar una reserva", "/bookings/:codigo"),
    },
}


@app.get("/")
def index():
    return {
        "mensaje": "Bienvenido al sistema de gestión de habitaciones y reservas, "
                   "estas son las rutas disponibles",
        "apis": APIS,
    }
