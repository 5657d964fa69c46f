import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./chefdhundo.db")

# ✅ Security
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# ✅ Identity provider webhook (user.created / user.updated)
IDENTITY_WEBHOOK_SECRET = os.getenv("IDENTITY_WEBHOOK_SECRET")

# ✅ Stripe
STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY")
STRIPE_WEBHOOK_SECRET = os.getenv("STRIPE_WEBHOOK_SECRET")
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "INR")

# ✅ Frontend
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if origin.strip()
]

# ✅ Object storage
STORAGE_DIR = os.getenv("STORAGE_DIR", "storage")
STORAGE_PUBLIC_URL = os.getenv("STORAGE_PUBLIC_URL", "http://localhost:8000/storage")
RESUME_BUCKET = os.getenv("RESUME_BUCKET", "resumes")

# ✅ Runtime
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"
