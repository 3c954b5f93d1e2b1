import os

# ---------------------------------------------------------------------------
# IBM i connection
# ---------------------------------------------------------------------------

DB_DRIVER: str = os.getenv("DB_DRIVER", "IBM i Access ODBC Driver")
DB_SYSTEM: str = os.getenv("DB_SYSTEM", "pub400.com")
DB_USER: str = os.getenv("DB_USER", "")
DB_PASS: str = os.getenv("DB_PASS", "")

# Library holding EMPPF1 and QCUSTCDT.  Pub400 gives every user a personal
# library named after the profile with a trailing "1".
DB_LIBRARY: str = os.getenv("DB_LIBRARY", f"{DB_USER}1").upper()

# ---------------------------------------------------------------------------
# Connection pool
# ---------------------------------------------------------------------------

DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "2"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "10"))
DB_POOL_TIMEOUT: float = float(os.getenv("DB_POOL_TIMEOUT", "30"))
DB_POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "1800"))

# ---------------------------------------------------------------------------
# Admin auth
# ---------------------------------------------------------------------------

ADMIN_PASSWORD: str | None = os.getenv("ADMIN_PASSWORD")

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")
PORT: int = int(os.getenv("PORT", "3000"))

# Set when a reverse proxy in front of the API rewrites X-Forwarded-For.
# Off by default: the header is client controlled and would let a caller pick
# its own rate-limit key.
TRUST_PROXY: bool = os.getenv("TRUST_PROXY", "false").lower() in ("1", "true", "yes")
