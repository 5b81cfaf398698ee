"""Development entry point: `python app.py` (use a WSGI server with `app:app` in production)."""

import os

from src.worktime_portal.worktime_portal.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")))
