"""
Start the feedsmith API server.

Responsibility: Local API server entry point
"""

import sys
import os

# Add project root to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import uvicorn
from feedsmith.config import settings


if __name__ == "__main__":
    print("🚀 Starting feedsmith API Server...")
    print(f"📍 API will be available at: http://localhost:{settings.app.api_port}")
    print(f"📰 RSS feed at: http://localhost:{settings.app.api_port}/api/v1/feeds/rss.xml")
    print(f"📚 Swagger docs at: http://localhost:{settings.app.api_port}/docs")
    print("\nPress CTRL+C to stop\n")

    uvicorn.run(
        "api.main:app",
        host=settings.app.api_host,
        port=settings.app.api_port,
        reload=settings.app.debug,
        log_level=settings.app.log_level.lower()
    )
