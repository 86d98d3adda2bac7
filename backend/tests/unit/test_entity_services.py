"""Unit tests for the per-entity façades built by EntityServices."""

from datetime import datetime, timedelta, timezone

import pytest

from portal.application.schemas import ClientCreate, TicketResponse
from portal.application.services.entity_service import MAX_UPDATE_ATTEMPTS
from portal.domain.clock import format_timestamp
from portal.domain.entities import EntityName, ticket_number_pattern
from portal.domain.exceptions import ConflictError, NotFoundError, ValidationError


def _ticket(**overrides) -> dict:
    return {
        "subject": "Cannot export reports",
        "description": "The export button spins forever.",
        "priority": "High",
        "email": "jane@acme.com",
        **overrides,
    }


def _client(**overrides) -> dict:
    return {
        "companyName": "Acme Holdings",
        "contactName": "Jane Smith",
        "email": "jane@acme.com",
        **overrides,
    }


# ── Validation through the façades ──


@pytest.mark.asyncio
async def test_create_reports_every_invalid_field(services, store):
    with pytest.raises(ValidationError) as exc_info:
        await services.clients.create(
            {"companyName": "A", "email": "not-an-email", "address": {"city": "x" * 101}}
        )

    fields = {error.field for error in exc_info.value.errors}
    assert {"companyName", "contactName", "email", "address.city"} <= fields
    assert store.writes == 0


@pytest.mark.asyncio
async def test_create_strips_unknown_fields(services):
    client = await services.clients.create(_client(favouriteColour="teal"))
    stored = await services.data_access.get(EntityName.CLIENTS, client.id)
    assert "favouriteColour" not in stored


@pytest.mark.asyncio
async def test_create_accepts_model_instance(services):
    client = await services.clients.create(
        ClientCreate(company_name="Bluegum Logistics", contact_name="Sam Lee", email="sam@bluegum.com.au")
    )
    assert client.company_name == "Bluegum Logistics"
    assert client.status == "Active"


@pytest.mark.asyncio
async def test_update_rejects_fields_outside_the_updatable_set(services, store):
    client = await services.clients.create(_client())
    writes = store.writes

    with pytest.raises(ValidationError) as exc_info:
        await services.clients.update(client.id, {"createdAt": "2000-01-01", "status": "Inactive"})

    assert [error.field for error in exc_info.value.errors] == ["createdAt"]
    assert store.writes == writes


@pytest.mark.asyncio
async def test_get_missing_raises_not_found(services):
    with pytest.raises(NotFoundError) as exc_info:
        await services.clients.get("missing")
    assert exc_info.value.message == "Client with key 'missing' not found"


@pytest.mark.asyncio
async def test_find_by_email(services):
    created = await services.clients.create(_client())

    found = await services.clients.find_by_email("jane@acme.com")

    assert found is not None
    assert found.id == created.id
    assert await services.clients.find_by_email("nobody@acme.com") is None


@pytest.mark.asyncio
async def test_admin_user_lookup_by_email_scans(services):
    await services.admin_users.create(
        {"email": "root@portal.com", "name": "Root", "role": "admin"}
    )
    found = await services.admin_users.find_by_email("root@portal.com")
    assert found is not None
    assert found.name == "Root"


def test_for_entity_resolves_slugs_and_table_names(services):
    assert services.for_entity("tickets") is services.tickets
    assert services.for_entity(EntityName.QR_CODES) is services.qr_codes
    assert services.for_entity("holdings-ctc-admin-users") is services.admin_users


# ── Tickets ──


@pytest.mark.asyncio
async def test_ticket_create_assigns_number_and_open_status(services):
    ticket = await services.tickets.create(
        _ticket(status="Closed", replies=[{"author": "x", "message": "y"}], ticketNumber="X-1")
    )

    assert ticket_number_pattern("HCTC").match(ticket.ticket_number)
    assert ticket.status == "Open"
    assert ticket.replies == []
    assert ticket.created_at == ticket.updated_at


@pytest.mark.asyncio
async def test_ticket_create_accepts_single_character_subject(services):
    ticket = await services.tickets.create(_ticket(subject="X"))
    assert ticket.subject == "X"


@pytest.mark.asyncio
async def test_ticket_create_rejects_bad_priority(services):
    with pytest.raises(ValidationError) as exc_info:
        await services.tickets.create(_ticket(priority="Whenever"))
    assert exc_info.value.errors[0].field == "priority"


@pytest.mark.asyncio
async def test_admin_reply_moves_open_ticket_in_progress(services):
    ticket = await services.tickets.create(_ticket())

    updated = await services.tickets.add_reply(
        ticket.id, {"author": "Support", "authorType": "admin", "message": "Looking into it."}
    )

    assert isinstance(updated, TicketResponse)
    assert updated.status == "In Progress"
    assert len(updated.replies) == 1
    assert updated.replies[0].author_type == "admin"
    assert updated.replies[0].id
    assert updated.replies[0].created_at


@pytest.mark.asyncio
async def test_client_reply_keeps_status(services):
    ticket = await services.tickets.create(_ticket())

    updated = await services.tickets.add_reply(
        ticket.id, {"author": "Jane", "message": "Any news?"}
    )

    assert updated.status == "Open"
    assert [reply.message for reply in updated.replies] == ["Any news?"]


@pytest.mark.asyncio
async def test_reply_to_missing_ticket_raises_not_found(services):
    with pytest.raises(NotFoundError):
        await services.tickets.add_reply("missing", {"author": "Jane", "message": "Hello"})


@pytest.mark.asyncio
async def test_get_ticket_by_number(services):
    ticket = await services.tickets.create(_ticket())

    found = await services.tickets.get_by_number(ticket.ticket_number)

    assert found.id == ticket.id
    with pytest.raises(NotFoundError):
        await services.tickets.get_by_number("HCTC-00000000")


@pytest.mark.asyncio
async def test_ticket_stats(services):
    first = await services.tickets.create(_ticket(priority="Urgent"))
    await services.tickets.create(_ticket())
    third = await services.tickets.create(_ticket())
    await services.tickets.update(first.id, {"status": "Resolved"})
    await services.tickets.update(third.id, {"status": "Closed"})

    stats = await services.tickets.stats()

    assert stats.total == 3
    assert stats.open == 1
    assert stats.resolved == 1
    assert stats.closed == 1
    assert stats.urgent == 1
    assert stats.model_dump(by_alias=True)["inProgress"] == 0


# ── Feature requests ──


@pytest.mark.asyncio
async def test_feature_request_upvote_is_idempotent(services):
    request = await services.feature_requests.create(
        {
            "title": "Dark mode please",
            "description": "A dark theme for the dashboard.",
            "category": "UI",
            "appId": "app-1",
            "submittedBy": "Jane",
            "upvotedBy": ["c-1", "c-1"],
        }
    )
    assert request.upvoted_by == ["c-1"]
    assert request.votes == 1

    voted = await services.feature_requests.upvote(request.id, "c-2")
    again = await services.feature_requests.upvote(request.id, "c-2")

    assert voted.votes == 2
    assert again.votes == 2
    assert again.upvoted_by == ["c-1", "c-2"]


def _rival_writes_first(store, change, times=1):
    """Make the next ``times`` guarded updates lose to a write ``change`` applies first."""
    update_existing = store.update_existing
    remaining = [times]

    async def racing_update(table, key_value, fields, *, expected=None):
        if expected and remaining[0]:
            remaining[0] -= 1
            row = store.tables[table.table_name][key_value]
            row.update(change(row))
        return await update_existing(table, key_value, fields, expected=expected)

    store.update_existing = racing_update


@pytest.mark.asyncio
async def test_upvote_keeps_a_vote_cast_concurrently(services, store):
    request = await services.feature_requests.create(
        {"title": "Dark mode please", "description": "A dark theme for the dashboard.",
         "category": "UI", "appId": "app-1", "submittedBy": "Jane"}
    )
    _rival_writes_first(store, lambda row: {"upvotedBy": ["c-9"], "votes": 1})

    voted = await services.feature_requests.upvote(request.id, "c-2")

    assert voted.upvoted_by == ["c-9", "c-2"]
    assert voted.votes == 2


@pytest.mark.asyncio
async def test_record_view_gives_up_after_repeated_conflicts(services, store):
    body = "A walkthrough of every export option in the reporting module. " * 2
    article = await services.knowledge_base.create(
        {"title": "Exporting reports", "content": body, "category": "Reports", "author": "Support"}
    )
    _rival_writes_first(
        store, lambda row: {"views": (row.get("views") or 0) + 1}, times=MAX_UPDATE_ATTEMPTS
    )

    with pytest.raises(ConflictError):
        await services.knowledge_base.record_view(article.id)

    assert (await services.knowledge_base.get(article.id)).views == MAX_UPDATE_ATTEMPTS


# ── Invoices ──


@pytest.mark.asyncio
async def test_invoice_totals_are_computed(services):
    invoice = await services.invoices.create(
        {
            "clientId": "c-1",
            "issueDate": "2024-05-01",
            "dueDate": "2024-05-31",
            "createdBy": "admin",
            "items": [
                {"description": "Seats", "quantity": 2, "unitPrice": 50},
                {"description": "Setup", "quantity": 1, "unitPrice": 25},
            ],
            "total": 1,
        }
    )

    assert invoice.subtotal == 125.0
    assert invoice.tax == 10.0
    assert invoice.total == 135.0
    assert [item.total for item in invoice.items] == [100.0, 25.0]
    assert invoice.invoice_number.startswith("INV-")
    assert invoice.invoice_number.endswith(invoice.id.replace("-", "")[:6].upper())


@pytest.mark.asyncio
async def test_marking_invoice_paid_sets_paid_date(services):
    invoice = await services.invoices.create(
        {"clientId": "c-1", "issueDate": "2024-05-01", "dueDate": "2024-05-31", "createdBy": "admin"}
    )

    paid = await services.invoices.update(invoice.id, {"status": "paid"})

    assert paid.status == "paid"
    assert paid.paid_date is not None


# ── QR codes ──


@pytest.mark.asyncio
async def test_qr_code_issue_and_redeem(services):
    client = await services.clients.create(_client())

    issued = await services.qr_codes.issue(client)
    assert issued.code.startswith("QR_ACMEHO_")
    assert issued.client_id == client.id
    assert issued.used is False

    redeemed = await services.qr_codes.redeem(issued.code)
    assert redeemed.used is True
    assert redeemed.used_at is not None

    with pytest.raises(ValidationError) as exc_info:
        await services.qr_codes.redeem(issued.code)
    assert exc_info.value.errors[0].message == "QR code has already been used"


@pytest.mark.asyncio
async def test_qr_code_redeem_rejects_malformed_and_unknown_codes(services):
    with pytest.raises(ValidationError):
        await services.qr_codes.redeem("hello")
    with pytest.raises(NotFoundError):
        await services.qr_codes.redeem("QR_ACME_ABC123_1714560000000")


@pytest.mark.asyncio
async def test_qr_code_redeem_rejects_expired_code(services):
    expired = format_timestamp(datetime.now(timezone.utc) - timedelta(days=1))
    await services.data_access.create(
        EntityName.QR_CODES,
        {"code": "QR_ACME_ABC123_1700000000000", "clientId": "c-1", "expiresAt": expired, "used": False},
    )

    with pytest.raises(ValidationError) as exc_info:
        await services.qr_codes.redeem("QR_ACME_ABC123_1700000000000")
    assert exc_info.value.errors[0].message == "QR code has expired"


# ── Knowledge base and home-page content ──


@pytest.mark.asyncio
async def test_knowledge_base_published_listing_and_views(services):
    body = "A walkthrough of every export option in the reporting module. " * 2
    published = await services.knowledge_base.create(
        {"title": "Exporting reports", "content": body, "category": "Reports",
         "author": "Support", "isPublished": True}
    )
    await services.knowledge_base.create(
        {"title": "Draft article", "content": body, "category": "Reports", "author": "Support"}
    )

    page = await services.knowledge_base.list_published()
    by_category = await services.knowledge_base.list_published("Reports")
    viewed = await services.knowledge_base.record_view(published.id)

    assert [article.id for article in page.items] == [published.id]
    assert [article.id for article in by_category.items] == [published.id]
    assert viewed.views == 1


@pytest.mark.asyncio
async def test_record_view_counts_a_concurrent_view(services, store):
    body = "A walkthrough of every export option in the reporting module. " * 2
    article = await services.knowledge_base.create(
        {"title": "Exporting reports", "content": body, "category": "Reports", "author": "Support"}
    )
    _rival_writes_first(store, lambda row: {"views": (row.get("views") or 0) + 1})

    viewed = await services.knowledge_base.record_view(article.id)

    assert viewed.views == 2


@pytest.mark.asyncio
async def test_popular_topics_are_ordered(services):
    for title, order in (("Billing", 2), ("Login", 0), ("Exports", 1)):
        await services.popular_topics.create(
            {"title": title, "articleId": "kb-1", "order": order, "createdBy": "admin"}
        )

    topics = await services.popular_topics.list_ordered()

    assert [topic.title for topic in topics] == ["Login", "Exports", "Billing"]
