import uvicorn

from spa_api.core.config import settings
from spa_api.main import app

if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
