from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Habitacion(Base):
    __tablename__ = "habitaciones"

    codigo = Column(Integer, primary_key=True, autoincrement=True)
    numero = Column(String(20), nullable=False)
    tipo = Column(String(50), nullable=False)
    valor = Column(Integer, nullable=False)


class Reserva(Base):
    __tablename__ = "reservas"

    codigo = Column(Integer, primary_key=True, autoincrement=True)
    # not a ForeignKey: bookings may outlive the room they point to
    codigo_habitacion = Column(Integer, nullable=False, index=True)
    nombre_cliente = Column(String(100), nullable=False)
    telefono_cliente = Column(String(30), nullable=False)
    fecha_reservacion = Column(DateTime, nullable=False)
    fecha_entrada = Column(DateTime, nullable=False)
    fecha_salida = Column(DateTime, nullable=False)
