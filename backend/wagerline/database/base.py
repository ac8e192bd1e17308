"""Declarative base for all Wagerline models."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
