# python -m app
import uvicorn
from dotenv import load_dotenv

load_dotenv()

from app.core.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.api_port)


if __name__ == "__main__":
    main()
