"""Application service for the apps clients subscribe to."""

from portal.application.schemas import AppCreate, AppResponse, AppUpdate
from portal.domain.entities import EntityName

from .entity_service import EntityService


class AppService(EntityService[AppCreate, AppUpdate, AppResponse]):
    entity = EntityName.APPS
    label = "App"
    create_schema = AppCreate
    update_schema = AppUpdate
    response_schema = AppResponse
