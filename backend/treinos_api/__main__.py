import uvicorn

from treinos_api.config import settings
from treinos_api.main import app

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
