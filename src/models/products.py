from sqlalchemy import Table, Column, Integer, String, Text, Numeric
from src.utils.db import metadata

products_table = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("description", Text),
    Column("price", Numeric(10, 2), nullable=False),
    Column("img", String(255)),
)
