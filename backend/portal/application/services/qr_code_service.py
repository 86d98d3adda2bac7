"""Application service for client onboarding QR codes.

Codes are keyed by their own value, expire after 30 days and can be
redeemed once.
"""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from portal.application.schemas import (
    ClientResponse,
    QRCodeCreate,
    QRCodeResponse,
    QRCodeUpdate,
)
from portal.domain.clock import format_timestamp
from portal.domain.entities import EntityName
from portal.domain.entities.qr_code import (
    expiry_for,
    generate_qr_code,
    is_expired,
    is_well_formed,
)
from portal.domain.exceptions import NotFoundError, ValidationError

from .entity_service import EntityService

logger = logging.getLogger(__name__)


class QRCodeService(EntityService[QRCodeCreate, QRCodeUpdate, QRCodeResponse]):
    entity = EntityName.QR_CODES
    label = "QRCode"
    create_schema = QRCodeCreate
    update_schema = QRCodeUpdate
    response_schema = QRCodeResponse

    def _prepare_create(self, record: dict[str, Any]) -> dict[str, Any]:
        record.pop("id", None)
        now = datetime.now(timezone.utc)
        record["code"] = generate_qr_code(record["companyName"])
        record["expiresAt"] = format_timestamp(expiry_for(now))
        record["used"] = False
        return record

    async def issue(
        self, client: ClientResponse | QRCodeCreate | Mapping[str, Any]
    ) -> QRCodeResponse:
        """Issue a new code for a client record or an explicit request."""
        if isinstance(client, ClientResponse):
            client = QRCodeCreate(
                client_id=client.id,
                company_name=client.company_name,
                contact_name=client.contact_name or client.company_name,
                email=client.email,
            )
        issued = await self.create(client)
        logger.info("Issued QR code %s for client %s", issued.code, issued.client_id)
        return issued

    async def redeem(self, code: str) -> QRCodeResponse:
        if not is_well_formed(code):
            raise ValidationError.single("code", "Invalid QR code format")
        qr = await self.find(code)
        if qr is None:
            raise NotFoundError(self.label, code)
        if qr.used:
            raise ValidationError.single("code", "QR code has already been used")
        if is_expired(qr.expires_at):
            raise ValidationError.single("code", "QR code has expired")

        updated = await self._data.update(
            self.entity, code, {"used": True, "usedAt": self._data.clock.stamp()}
        )
        logger.info("QR code %s redeemed by client %s", code, qr.client_id)
        return self._to_response(updated)
