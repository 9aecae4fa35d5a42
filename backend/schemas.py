from datetime import datetime
from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field, model_validator

from config import get_settings
from formatting import get_timezone, to_local_naive

# signed 32 bit INT columns
MAX_INT = 2**31 - 1

Codigo = Annotated[int, Path(ge=1, le=MAX_INT)]


class HabitacionIn(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, str_strip_whitespace=True)

    numero: str = Field(min_length=1, max_length=20)
    tipo: str = Field(min_length=1, max_length=50)
    valor: int = Field(ge=0, le=MAX_INT)


class ReservaIn(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, str_strip_whitespace=True)

    codigo_habitacion: int = Field(ge=1, le=MAX_INT)
    nombre_cliente: str = Field(min_length=1, max_length=100)
    telefono_cliente: str = Field(min_length=1, max_length=30)
    fecha_reservacion: datetime
    fecha_entrada: datetime
    fecha_salida: datetime

    @model_validator(mode="after")
    def check_dates(self):
        # compared the way they will be stored: naive local time
        tz = get_timezone(get_settings().DISPLAY_TIMEZONE)
        entrada = to_local_naive(self.fecha_entrada, tz)
        salida = to_local_naive(self.fecha_salida, tz)
        if salida <= entrada:
            raise ValueError("fecha_salida debe ser posterior a fecha_entrada")
        return self
