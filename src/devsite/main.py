"""devsite FastAPI application."""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from devsite.config import settings
from devsite.core.chess import ChessAPIError, LichessClient
from devsite.core.models import BlogData, BlogPostData, Page
from devsite.core.navigation import build_header_data
from devsite.core.posts import FilePostStore, PostsDirectoryError
from devsite.core.renderer import render_post

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize storage and the chess client
posts = FilePostStore(settings.posts_dir)
chess_client = LichessClient(
    api_url=settings.lichess_api_url,
    api_key=settings.lichess_api_key,
    timeout=settings.lichess_timeout,
)

# Created once; shared read-only by every request
header_data = build_header_data(chess_enabled=settings.chess_enabled)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: refuse to start without a readable posts directory."""
    slugs = await posts.list_slugs()
    logger.info("Serving %d posts from %s", len(slugs), settings.posts_dir)
    yield


# Initialize app
app = FastAPI(
    title=settings.app_title,
    debug=settings.debug,
    lifespan=lifespan,
)

# Setup templates and static files
templates_path = Path(__file__).parent / "templates"
static_path = Path(__file__).parent / "static"

templates = Jinja2Templates(directory=str(templates_path))
app.mount("/public", StaticFiles(directory=str(static_path / "public")), name="public")
app.mount("/css", StaticFiles(directory=str(static_path / "css")), name="css")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log one line per request."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.exception_handler(PostsDirectoryError)
async def posts_directory_error_handler(request: Request, exc: PostsDirectoryError):
    """The posts directory vanished or became unreadable while running."""
    logger.critical("%s", exc)
    return HTMLResponse("Internal Server Error", status_code=500)


def is_partial(request: Request) -> bool:
    """True when htmx asked for a fragment rather than a full page."""
    return "hx-request" in request.headers


def new_page(**kwargs) -> Page:
    """Create a request-scoped page view model."""
    return Page(header_data=header_data, **kwargs)


def render_page(request: Request, name: str, page: Page) -> HTMLResponse:
    """Render ``<name>.html``, or its fragment for partial requests.

    Full pages and fragments receive the same context.
    """
    template = f"partials/{name}.html" if is_partial(request) else f"{name}.html"
    return templates.TemplateResponse(
        request,
        template,
        {"request": request, "app_title": settings.app_title, "page": page},
    )


@app.get("/", response_class=HTMLResponse)
async def profile(request: Request):
    """Home page."""
    return render_page(request, "profile", new_page())


@app.get("/blog", response_class=HTMLResponse)
async def blog(request: Request):
    """List all posts."""
    slugs = await posts.list_slugs()
    return render_page(request, "blog", new_page(blog_data=BlogData(slugs=slugs)))


@app.get("/blog/{post}", response_class=HTMLResponse)
async def blog_post(request: Request, post: str):
    """Render a single post."""
    text = await posts.read(post)
    if text is None:
        raise HTTPException(status_code=404, detail="Post not found")

    rendered = render_post(text)
    post_data = BlogPostData(slug=post, html=rendered.html, metadata=rendered.metadata)
    return render_page(request, "blog-post", new_page(blog_post_data=post_data))


@app.get("/contact", response_class=HTMLResponse)
async def contact(request: Request):
    """Contact page."""
    return render_page(request, "contact", new_page())


async def chess(request: Request):
    """Chess rating widget backed by the Lichess API."""
    try:
        chess_data = await chess_client.fetch_ratings()
    except ChessAPIError as e:
        return JSONResponse({"message": e.message}, status_code=500)

    return render_page(request, "chess", new_page(chess_data=chess_data))


if settings.chess_enabled:
    app.add_api_route("/chess", chess, methods=["GET"], response_class=HTMLResponse)
