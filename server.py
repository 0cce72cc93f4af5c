import threading
import webbrowser

import uvicorn

from backend.config import get_settings


def run_uvicorn(host: str, port: int, log_level: str):
    """
    Run the FastAPI app via uvicorn in this process.
    """
    config = uvicorn.Config(
        "backend.main:app",
        host=host,
        port=port,
        log_level=log_level.lower(),
    )
    server = uvicorn.Server(config)
    server.run()


def open_browser_once(url: str):
    print(f"[server] Opening {url}")
    try:
        webbrowser.open(url)
    except webbrowser.Error:
        print("[server] Could not open a browser.")


def main():
    settings = get_settings()
    url = f"http://{settings.host}:{settings.port}/"

    if settings.open_browser:
        # give uvicorn a moment to boot before opening the browser
        threading.Timer(1.0, open_browser_once, args=(url,)).start()

    print(f"[server] Serving links from {settings.links_file}")
    try:
        run_uvicorn(settings.host, settings.port, settings.log_level)
    except KeyboardInterrupt:
        print("\n[server] Shutting down.")


if __name__ == "__main__":
    main()
