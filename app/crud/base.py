from typing import Any, Dict, Generic, Iterable, Optional, Tuple, Type, TypeVar, Union
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session
from app.core.database import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Storage capability set shared by every table: get, create, update, upsert, insert_if_absent.

    ``upsert`` and ``insert_if_absent`` rely on the table's unique constraint and the
    engine's ``ON CONFLICT`` support, so concurrent writers never need an application lock.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_by(self, db: Session, **filters: Any) -> Optional[ModelType]:
        return db.query(self.model).filter_by(**filters).populate_existing().first()

    def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]], commit: bool = True) -> ModelType:
        obj_in_data = obj_in if isinstance(obj_in, dict) else jsonable_encoder(obj_in)
        db_obj = self.model(**obj_in_data)
        db.add(db_obj)
        db.flush() # Populate ID
        db.refresh(db_obj)
        if commit:
            db.commit()
        return db_obj

    def update(
        self, db: Session, *, db_obj: ModelType, obj_in: Union[UpdateSchemaType, Dict[str, Any]], commit: bool = True
    ) -> ModelType:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        db.add(db_obj)
        if commit:
            db.commit()
            db.refresh(db_obj)
        else:
            db.flush()
        return db_obj

    def _insert(self, db: Session):
        dialect = db.get_bind().dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect](self.model)
        except KeyError:
            raise NotImplementedError(f"Conflict-aware inserts are not supported on '{dialect}'")

    def upsert(
        self,
        db: Session,
        *,
        values: Dict[str, Any],
        conflict_fields: Iterable[str],
        update_fields: Iterable[str],
        commit: bool = True,
    ) -> ModelType:
        """Insert a row, or update ``update_fields`` when ``conflict_fields`` already exist."""
        conflict_fields = list(conflict_fields)
        stmt = self._insert(db).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=conflict_fields,
            set_={field: stmt.excluded[field] for field in update_fields},
        )
        db.execute(stmt)
        if commit:
            db.commit()
        return self.get_by(db, **{field: values[field] for field in conflict_fields})

    def insert_if_absent(
        self,
        db: Session,
        *,
        values: Dict[str, Any],
        conflict_fields: Iterable[str],
        commit: bool = True,
    ) -> Tuple[ModelType, bool]:
        """Insert a row unless ``conflict_fields`` already exist; the first writer wins.

        Returns the stored row and whether this call created it.
        """
        conflict_fields = list(conflict_fields)
        stmt = self._insert(db).values(**values).on_conflict_do_nothing(index_elements=conflict_fields)
        result = db.execute(stmt)
        created = result.rowcount == 1
        if commit:
            db.commit()
        return self.get_by(db, **{field: values[field] for field in conflict_fields}), created
