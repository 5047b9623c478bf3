import os
from dotenv import load_dotenv

# .envファイルを読み込む
load_dotenv()

class Settings:
    """アプリケーション設定"""
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./city_explorer.db")
    PORT: int = int(os.getenv("PORT", "3000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # 各プロバイダのAPIキー (なければ空文字)
    GEOCODE_API_KEY: str = os.getenv("GEOCODE_API_KEY", "")
    DARKSKY_API_KEY: str = os.getenv("DARKSKY_API_KEY", "")
    YELP_API_KEY: str = os.getenv("YELP_API_KEY", "")
    MOVIES_DB_API_KEY: str = os.getenv("MOVIES_DB_API_KEY", "")

    WEATHER_API_URL: str = os.getenv("WEATHER_API_URL", "https://api.darksky.net/forecast")
    YELP_API_URL: str = os.getenv("YELP_API_URL", "https://api.yelp.com/v3/businesses/search")
    MOVIES_API_URL: str = os.getenv("MOVIES_API_URL", "https://api.themoviedb.org/3/search/movie")

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if not hasattr(type(self), key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

settings = Settings()
