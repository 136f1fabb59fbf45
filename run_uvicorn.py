# run_uvicorn.py
# Launcher used for debugging in VS Code (no uvicorn reload subprocess).
import logging
import os

# Safe defaults so import-time DB code doesn't explode if env vars are missing.
os.environ.setdefault("DATABASE_URL", "sqlite:///./dev_local.db")
os.environ.setdefault("PAYMENT_GATEWAY", "fallback")
os.environ.setdefault("PUBLIC_BASE_URL", "http://127.0.0.1:8000")

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

from mytaxy.main import app  # noqa: E402

if __name__ == "__main__":
    import uvicorn
    # IMPORTANT: reload=False so uvicorn does NOT spawn a reloader subprocess.
    uvicorn.run(app, host="127.0.0.1", port=8000, reload=False)
