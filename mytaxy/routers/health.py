# mytaxy/routers/health.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from mytaxy.database.database import get_db

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/db")
def db_health(db: Session = Depends(get_db)):
    """
    Lightweight health check for the database.
    """
    try:
        db.execute(text("SELECT 1"))
        return {"ok": True, "dialect": db.get_bind().dialect.name}
    except Exception as e:
        # Do not leak connection strings; just return an operational error
        raise HTTPException(status_code=503, detail=f"Database error: {type(e).__name__}") from e
