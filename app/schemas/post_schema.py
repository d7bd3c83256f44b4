from marshmallow import validate

from app.extensions.extensions import ma


not_blank = validate.Regexp(r"\s*\S", error="Must not be blank.")


class PostCreateSchema(ma.Schema):
    header = ma.Str(required=True, validate=not_blank)
    content = ma.Str(required=True, validate=not_blank)
    cover_img = ma.Str(data_key="coverImg")
    tags = ma.List(ma.Str())
    slug = ma.Str()


class PostUpdateSchema(PostCreateSchema):
    """Same fields as creation; loaded with ``partial=True``."""


post_create_schema = PostCreateSchema()
post_update_schema = PostUpdateSchema(partial=True)
