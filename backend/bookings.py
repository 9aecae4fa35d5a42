from datetime import tzinfo

from fastapi import APIRouter, Depends
from sqlalchemy import DateTime, Integer, String, bindparam, text

from config import get_settings
from database import Store, get_store
from errors import NotFoundError, StoreError, error_response
from formatting import format_fields, get_timezone, to_local_naive
from logger import get_logger
from schemas import Codigo, ReservaIn

logger = get_logger(__name__)

router = APIRouter(prefix="/bookings", tags=["reservas"])

DATE_FIELDS = ("fecha_reservacion", "fecha_entrada", "fecha_salida")

_COLUMNS = dict(
    codigo=Integer,
    codigo_habitacion=Integer,
    nombre_cliente=String,
    telefono_cliente=String,
    **{field: DateTime for field in DATE_FIELDS},
)
_DATE_BINDS = [bindparam(field, type_=DateTime) for field in DATE_FIELDS]

_SELECT = (
    "SELECT codigo, codigo_habitacion, nombre_cliente, telefono_cliente, "
    "fecha_reservacion, fecha_entrada, fecha_salida FROM reservas"
)
SELECT_RESERVAS = text(_SELECT).columns(**_COLUMNS)
SELECT_RESERVA = text(_SELECT + " WHERE codigo = :codigo").columns(**_COLUMNS)
INSERT_RESERVA = text(
    "INSERT INTO reservas (codigo_habitacion, nombre_cliente, telefono_cliente, "
    "fecha_reservacion, fecha_entrada, fecha_salida) "
    "VALUES (:codigo_habitacion, :nombre_cliente, :telefono_cliente, "
    ":fecha_reservacion, :fecha_entrada, :fecha_salida)"
).bindparams(*_DATE_BINDS)
UPDATE_RESERVA = text(
    "UPDATE reservas SET codigo_habitacion = :codigo_habitacion, "
    "nombre_cliente = :nombre_cliente, telefono_cliente = :telefono_cliente, "
    "fecha_reservacion = :fecha_reservacion, fecha_entrada = :fecha_entrada, "
    "fecha_salida = :fecha_salida WHERE codigo = :codigo"
).bindparams(*_DATE_BINDS)
DELETE_RESERVA = text("DELETE FROM reservas WHERE codigo = :codigo")


def get_display_timezone() -> tzinfo:
    return get_timezone(get_settings().DISPLAY_TIMEZONE)


def _to_params(data: ReservaIn, tz: tzinfo) -> dict:
    params = data.model_dump()
    for field in DATE_FIELDS:
        params[field] = to_local_naive(params[field], tz)
    return params


@router.get("")
def list_bookings(store: Store = Depends(get_store), tz: tzinfo = Depends(get_display_timezone)):
    try:
        rows = store.fetch_all(SELECT_RESERVAS)
    except StoreError as e:
        return error_response(500, "Error al consultar los registros en la base de datos", e.code)
    reservas = [format_fields(row, DATE_FIELDS, tz) for row in rows]
    return {
        "mensaje": f"Se encontraron {len(reservas)} registros",
        "reservas": reservas,
    }


@router.get("/{codigo}")
def get_booking(codigo: Codigo, store: Store = Depends(get_store), tz: tzinfo = Depends(get_display_timezone)):
    try:
        rows = store.fetch_all(SELECT_RESERVA, {"codigo": codigo})
    except StoreError as e:
        return error_response(500, "Error al consultar los registros en la base de datos", e.code)
    if not rows:
        raise NotFoundError(f"No se encontró la reserva con el código {codigo}")
    return {
        "mensaje": "Se encontró el registro en la base de datos",
        "reservas": format_fields(rows[0], DATE_FIELDS, tz),
    }


@router.post("", status_code=201)
def create_booking(data: ReservaIn, store: Store = Depends(get_store), tz: tzinfo = Depends(get_display_timezone)):
    try:
        result = store.execute(INSERT_RESERVA, _to_params(data, tz))
    except StoreError as e:
        return error_response(500, "Error al insertar el registro en la base de datos", e.code)
    logger.info(f"Reserva {result.lastrowid} creada para la habitación {data.codigo_habitacion}")
    return {"mensaje": "Reserva creada", "codigo": result.lastrowid}


@router.patch("/{codigo}")
def update_booking(codigo: Codigo, data: ReservaIn, store: Store = Depends(get_store),
                   tz: tzinfo = Depends(get_display_timezone)):
    try:
        result = store.execute(UPDATE_RESERVA, {**_to_params(data, tz), "codigo": codigo})
    except StoreError as e:
        return error_response(500, "Error al actualizar el registro en la base de datos", e.code)
    logger.info(f"Reserva {codigo} actualizada ({result.rowcount} filas)")
    return {"mensaje": "Reserva actualizada", "filas_afectadas": result.rowcount}


@router.delete("/{codigo}")
def delete_booking(codigo: Codigo, store: Store = Depends(get_store)):
    try:
        result = store.execute(DELETE_RESERVA, {"codigo": codigo})
    except StoreError as e:
        return error_response(500, "Error al eliminar el registro en la base de datos", e.code)
    logger.info(f"Reserva {codigo} eliminada ({result.rowcount} filas)")
    return {"mensaje": "Reserva eliminada", "filas_afectadas": result.rowcount}
