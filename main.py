"""Entry point shim.

The canonical ASGI app is `app.main:app`; this module lets
`uvicorn main:app` and `python main.py` work from the repository root.
"""

from app.main import app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
