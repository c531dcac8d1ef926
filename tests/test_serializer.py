import pytest
from sqlalchemy import Column, ForeignKey, Integer, String, create_engine
from sqlalchemy.orm import Session, declarative_base, relationship

from jsonapi_doc.core import DocumentBuilder
from jsonapi_doc.schemas import Resource
from jsonapi_doc.serializers import JSONAPISerializer

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    posts = relationship("Post", back_populates="author")


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    body = Column(String, nullable=False, default="")
    author_id = Column(Integer, ForeignKey("users.id"))
    author = relationship("User", back_populates="posts")


class PostSerializer(JSONAPISerializer):
    class Meta:
        type_ = "posts"
        model = Post
        fields = ["id", "title"]


class UserSerializer(JSONAPISerializer):
    class Meta:
        type_ = "users"
        model = User


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def post(engine):
    with Session(engine, expire_on_commit=False) as session:
        author = User(name="Jane")
        post = Post(title="Hello", body="World", author=author)
        session.add_all([author, post])
        session.commit()
        yield post


def test_resource_with_loaded_relationship(post):
    resource = PostSerializer().to_resource(post, base_url="http://api/").finish()

    assert resource.type_ == "posts"
    assert resource.id == str(post.id)
    assert resource.attributes == {"title": "Hello"}
    assert resource.links.self_ == f"http://api/posts/{post.id}"
    author = resource.relationships["author"]
    assert author.data == Resource(type_="users", id=str(post.author.id))
    assert author.links.self_ == f"http://api/posts/{post.id}/relationships/author"
    assert author.links.related == f"http://api/posts/{post.id}/author"


def test_attributes_default_to_mapped_columns(post):
    resource = UserSerializer().to_resource(post.author).finish()

    assert resource.attributes == {"name": "Jane"}
    assert resource.links is None


def test_unsaved_instance_has_no_id_or_links():
    resource = PostSerializer().to_resource(Post(title="Draft"), base_url="http://api/").finish()

    assert resource.id is None
    assert resource.attributes == {"title": "Draft"}
    assert resource.links is None
    assert resource.relationships is None


def test_foreign_keys_are_not_attributes(post):
    class Plain(JSONAPISerializer):
        class Meta:
            type_ = "posts"

    assert Plain().get_attributes(post) == {"title": "Hello", "body": "World"}


def test_sparse_fieldsets(post):
    resource = PostSerializer().to_resource(post, base_url="http://api", fields=["author"]).finish()

    assert resource.attributes is None
    assert set(resource.relationships) == {"author"}


def test_unloaded_relationship_has_links_only(engine, post):
    with Session(engine) as session:
        fresh = session.get(Post, post.id)
        resource = PostSerializer().to_resource(fresh, base_url="http://api").finish()

    author = resource.relationships["author"]
    assert author.data is None
    assert author.links.related == f"http://api/posts/{post.id}/author"


def test_unloaded_relationship_without_links_is_omitted(engine, post):
    with Session(engine) as session:
        fresh = session.get(Post, post.id)
        resource = PostSerializer().to_resource(fresh).finish()

    assert resource.relationships is None


def test_to_many_members_in_collection_document(post):
    builders = PostSerializer().to_many([post, post])

    document = DocumentBuilder.for_collection(builders).finish()

    assert [resource.id for resource in document.data] == [str(post.id)] * 2


def test_non_mapped_objects_have_no_relationships():
    class Thing:
        id = 3
        label = "x"

    class ThingSerializer(JSONAPISerializer):
        class Meta:
            type_ = "things"
            fields = ["label"]

    resource = ThingSerializer().to_resource(Thing()).finish()
    assert resource == Resource(type_="things", id="3", attributes={"label": "x"})
