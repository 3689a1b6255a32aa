from sqlalchemy import delete, func, insert, select, text, update

from utils.helpers import serialize_row

TIMESTAMP_COLUMNS = ("created_at", "updated_at")


class DatabaseHelper:
    """
    Generic CRUD statements against tables looked up by name.

    The helper is built around the session it is given; callers own the
    session's lifecycle. Every value travels as a bound parameter.
    """

    def __init__(self, session, metadata):
        self.session = session
        self.metadata = metadata

    def table(self, name):
        return self.metadata.tables[name]

    def find_by_id(self, table_name, record_id, for_update=False):
        table = self.table(table_name)
        stmt = select(table).where(table.c.id == record_id)
        if for_update:
            stmt = stmt.with_for_update()
        row = self.session.execute(stmt).mappings().first()
        return serialize_row(row) if row else None

    def find_all(self, table_name, filters=None):
        table = self.table(table_name)
        stmt = select(table)
        for column, value in (filters or {}).items():
            stmt = stmt.where(table.c[column] == value)
        stmt = stmt.order_by(table.c.id)
        return [serialize_row(row) for row in self.session.execute(stmt).mappings()]

    def fetch_all(self, stmt):
        """Run a composed select and return its rows as dicts."""
        return [serialize_row(row) for row in self.session.execute(stmt).mappings()]

    def insert(self, table_name, data, commit=True):
        table = self.table(table_name)
        result = self.session.execute(insert(table).values(**data))

        new_id = None
        if result.inserted_primary_key:
            new_id = result.inserted_primary_key[0]

        # Fallback when the driver does not report the generated key
        if not new_id:
            new_id = self._last_inserted_id(table, data)

        if commit:
            self.session.commit()
        return int(new_id) if new_id else 0

    def update(self, table_name, record_id, data, commit=True):
        table = self.table(table_name)
        values = dict(data)
        values["updated_at"] = func.now()

        result = self.session.execute(
            update(table).where(table.c.id == record_id).values(**values)
        )
        if commit:
            self.session.commit()
        return result.rowcount > 0

    def delete(self, table_name, record_id):
        table = self.table(table_name)
        result = self.session.execute(delete(table).where(table.c.id == record_id))
        self.session.commit()
        return result.rowcount > 0

    def exists(self, table_name, record_id):
        table = self.table(table_name)
        stmt = select(table.c.id).where(table.c.id == record_id).limit(1)
        return self.session.execute(stmt).first() is not None

    def count(self, table_name, filters=None):
        table = self.table(table_name)
        stmt = select(func.count()).select_from(table)
        for column, value in (filters or {}).items():
            stmt = stmt.where(table.c[column] == value)
        return self.session.execute(stmt).scalar_one()

    def ping(self):
        self.session.execute(text("SELECT 1"))
        return True

    def _last_inserted_id(self, table, data):
        stmt = select(table.c.id)
        for column, value in data.items():
            if column in TIMESTAMP_COLUMNS:
                continue
            if value is None:
                stmt = stmt.where(table.c[column].is_(None))
            else:
                stmt = stmt.where(table.c[column] == value)
        stmt = stmt.order_by(table.c.id.desc()).limit(1)
        return self.session.execute(stmt).scalar()
