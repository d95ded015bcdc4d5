"""
Table definitions for the request log.
"""
from sqlalchemy import Column, DateTime, Integer, MetaData, Table, Text, func

metadata = MetaData()

recommendations_table = Table(
    "recommendations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_input", Text, nullable=False),
    Column("recommended_movies", Text, nullable=False),
    Column("timestamp", DateTime, server_default=func.current_timestamp()),
)
