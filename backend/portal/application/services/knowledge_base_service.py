"""Application service for knowledge-base articles."""

from portal.application.schemas import ArticleCreate, ArticleResponse, ArticleUpdate, PageResponse
from portal.domain.entities import EntityName

from .entity_service import EntityService


class KnowledgeBaseService(EntityService[ArticleCreate, ArticleUpdate, ArticleResponse]):
    entity = EntityName.KNOWLEDGE_BASE
    label = "KnowledgeBaseArticle"
    create_schema = ArticleCreate
    update_schema = ArticleUpdate
    response_schema = ArticleResponse

    async def list_published(
        self, category: str | None = None, *, limit: int = 50, cursor: str | None = None
    ) -> PageResponse[ArticleResponse]:
        filters = {"isPublished": True}
        if category:
            return await self.query_by(
                "CategoryIndex", category, filters=filters, limit=limit, cursor=cursor
            )
        return await self.list(filters=filters, limit=limit, cursor=cursor)

    async def record_view(self, article_id: str) -> ArticleResponse:
        """Count one view; concurrent views are all counted."""

        def bump(record: dict) -> tuple[dict, dict]:
            views = record.get("views")
            return {"views": (views or 0) + 1}, {"views": views}

        return await self._read_modify_write(article_id, bump)
