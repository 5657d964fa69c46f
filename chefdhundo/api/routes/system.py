from fastapi import APIRouter
from sqlalchemy import text
from chefdhundo.db.session import SessionLocal
from chefdhundo.core import config

router = APIRouter(prefix="/system", tags=["System"])

@router.get("/health")
def system_health():
    db_ok = True
    try:
        db = SessionLocal()
        db.execute(text("SELECT 1"))
        db.close()
    except Exception:
        db_ok = False

    return {
        "status": "ok",
        "database": "connected" if db_ok else "error",
        "payments": "configured" if config.STRIPE_SECRET_KEY else "disabled",
        "api_version": "1.0.0",
        "service": "Chef Dhundo API"
    }
