# main.py
from tradehub.config.settings import get_settings
from tradehub.main import app

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("tradehub.main:app", host=settings.host, port=settings.port, reload=settings.reload)
