from fastapi import APIRouter, Depends

from database import Store, get_store
from errors import NotFoundError, StoreError, error_response
from logger import get_logger
from schemas import Codigo, HabitacionIn

logger = get_logger(__name__)

router = APIRouter(prefix="/rooms", tags=["habitaciones"])

SELECT_HABITACIONES = "SELECT codigo, numero, tipo, valor FROM habitaciones"
SELECT_HABITACION = SELECT_HABITACIONES + " WHERE codigo = :codigo"
INSERT_HABITACION = "INSERT INTO habitaciones (numero, tipo, valor) VALUES (:numero, :tipo, :valor)"
UPDATE_HABITACION = "UPDATE habitaciones SET numero = :numero, tipo = :tipo, valor = :valor WHERE codigo = :codigo"
DELETE_HABITACION = "DELETE FROM habitaciones WHERE codigo = :codigo"


@router.get("")
def list_rooms(store: Store = Depends(get_store)):
    try:
        habitaciones = store.fetch_all(SELECT_HABITACIONES)
    except StoreError as e:
        return error_response(500, "Error al consultar los registros en la base de datos", e.code)
    return {
        "mensaje": f"Se encontraron {len(habitaciones)} registros",
        "habitaciones": habitaciones,
    }


@router.get("/{codigo}")
def get_room(codigo: Codigo, store: Store = Depends(get_store)):
    try:
        rows = store.fetch_all(SELECT_HABITACION, {"codigo": codigo})
    except StoreError as e:
        return error_response(500, "Error al consultar los registros en la base de datos", e.code)
    if not rows:
        raise NotFoundError(f"No se encontró la habitación con el código {codigo}")
    return {
        "mensaje": "Se encontró el registro en la base de datos",
        "habitaciones": rows[0],
    }


@router.post("", status_code=201)
def create_room(data: HabitacionIn, store: Store = Depends(get_store)):
    try:
        result = store.execute(INSERT_HABITACION, data.model_dump())
    except StoreError as e:
        return error_response(500, "Error al insertar el registro en la base de datos", e.code)
    logger.info(f"Habitación {result.lastrowid} creada")
    return {"mensaje": "Habitación creada", "codigo": result.lastrowid}


@router.patch("/{codigo}")
def update_room(codigo: Codigo, data: HabitacionIn, store: Store = Depends(get_store)):
    try:
        result = store.execute(UPDATE_HABITACION, {**data.model_dump(), "codigo": codigo})
    except StoreError as e:
        return error_response(500, "Error al actualizar el registro en la base de datos", e.code)
    logger.info(f"Habitación {codigo} actualizada ({result.rowcount} filas)")
    return {"mensaje": "Habitación actualizada", "filas_afectadas": result.rowcount}


@router.delete("/{codigo}")
def delete_room(codigo: Codigo, store: Store = Depends(get_store)):
    try:
        result = store.execute(DELETE_HABITACION, {"codigo": codigo})
    except StoreError as e:
        return error_response(500, "Error al eliminar el registro en la base de datos", e.code)
    logger.info(f"Habitación {codigo} eliminada ({result.rowcount} filas)")
    return {"mensaje": "Habitación eliminada", "filas_afectadas": result.rowcount}
