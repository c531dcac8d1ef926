"""Example FastAPI app serving JSON:API documents built with jsonapi_doc.

Run with:
    uvicorn examples.jsonapi_example_app:app --reload
"""
from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends, FastAPI, HTTPException, Request
from sqlalchemy import Column, ForeignKey, Integer, String, func, select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, relationship, selectinload, sessionmaker

from jsonapi_doc import DocumentBuilder, HttpStatus, Version, decode_document
from jsonapi_doc.middleware import ContentNegotiationMiddleware, ErrorHandlerMiddleware
from jsonapi_doc.pagination import StandardPagination
from jsonapi_doc.responses import JSONAPIResponse, install_exception_handlers
from jsonapi_doc.serializers import JSONAPISerializer

DATABASE_URL = "sqlite+aiosqlite:///./jsonapi_example.db"

engine = create_async_engine(DATABASE_URL, echo=True)
async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    articles = relationship("Article", back_populates="author")


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    body = Column(String, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"))
    author = relationship("User", back_populates="articles")


class ArticleSerializer(JSONAPISerializer):
    class Meta:
        type_ = "articles"
        model = Article
        fields = ["id", "title", "body"]


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def seed_example_data(session: AsyncSession) -> None:
    """Insert example users and articles if empty."""
    result = await session.execute(select(User.id).limit(1))
    if result.first() is not None:
        return

    jane = User(name="Jane Doe", email="jane.doe@example.com")
    john = User(name="John Smith", email="john.smith@example.com")
    session.add_all([jane, john])
    await session.flush()
    session.add_all(
        [
            Article(title="JSON:API with FastAPI", body="Building documents.", author_id=jane.id),
            Article(title="Immutable builders", body="Chaining setters.", author_id=john.id),
            Article(title="Pagination links", body="Offsets and limits.", author_id=jane.id),
        ]
    )
    await session.commit()


app = FastAPI(
    title="jsonapi_doc example",
    description="Example API serving JSON:API v1.1 documents.",
    version="0.1.0",
)
app.add_middleware(ContentNegotiationMiddleware)
app.add_middleware(ErrorHandlerMiddleware)
install_exception_handlers(app)

serializer = ArticleSerializer()
pagination = StandardPagination()
jsonapi = Version.default()


@app.on_event("startup")
async def on_startup() -> None:
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    async with async_session() as session:
        await seed_example_data(session)


@app.get("/api/v1/articles")
async def list_articles(
    request: Request, session: AsyncSession = Depends(get_session)
) -> JSONAPIResponse:
    base_url = str(request.base_url).rstrip("/") + "/api/v1"
    page = {
        key[len("page[") : -1]: value
        for key, value in request.query_params.items()
        if key.startswith("page[") and key.endswith("]")
    }
    params = {"base_url": str(request.url.replace(query="")), "page": page}
    total = (await session.execute(select(func.count(Article.id)))).scalar_one()
    result = await session.execute(select(Article).options(selectinload(Article.author)))
    articles = pagination.paginate_queryset(list(result.scalars()), params)

    document = (
        DocumentBuilder.for_collection(serializer.to_many(articles, base_url=base_url))
        .with_jsonapi(jsonapi)
        .with_links(pagination.get_links(total=total, params=params))
        .with_meta(pagination.get_meta(total=total, params=params))
    )
    return JSONAPIResponse(document)


@app.get("/api/v1/articles/{article_id}")
async def get_article(
    article_id: int, request: Request, session: AsyncSession = Depends(get_session)
) -> JSONAPIResponse:
    base_url = str(request.base_url).rstrip("/") + "/api/v1"
    result = await session.execute(
        select(Article).options(selectinload(Article.author)).where(Article.id == article_id)
    )
    article = result.scalar_one_or_none()
    if article is None:
        raise HTTPException(status_code=404, detail=f"article {article_id} not found")
    document = DocumentBuilder.for_resource(
        serializer.to_resource(article, base_url=base_url)
    ).with_jsonapi(jsonapi)
    return JSONAPIResponse(document)


@app.post("/api/v1/articles")
async def create_article(
    request: Request, session: AsyncSession = Depends(get_session)
) -> JSONAPIResponse:
    base_url = str(request.base_url).rstrip("/") + "/api/v1"
    incoming = decode_document(await request.body())
    resource = incoming.data
    if resource is None or isinstance(resource, list) or resource.type_ != "articles":
        raise HTTPException(status_code=409, detail="expected a single articles resource")
    attributes = resource.attributes or {}
    article = Article(title=attributes.get("title", ""), body=attributes.get("body", ""))
    author = (resource.relationships or {}).get("author")
    if author is not None and author.data is not None and not isinstance(author.data, list):
        article.author_id = int(author.data.id)
    session.add(article)
    await session.flush()

    built = serializer.to_resource(article, base_url=base_url)
    location = f"{base_url}/articles/{article.id}"
    return JSONAPIResponse(
        DocumentBuilder.for_resource(built).with_jsonapi(jsonapi),
        status_code=HttpStatus.CREATED,
        headers={"Location": location},
    )
