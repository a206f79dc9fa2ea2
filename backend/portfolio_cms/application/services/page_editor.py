"""Owner page actions — text commits, item add/update/delete, image uploads.

Every action requires an unlocked Edit-Mode Session. A falsy result from the
remote client is turned into a RecordStoreError carrying the message the
owner is shown.
"""

import logging
from typing import Any

from portfolio_cms.application.interfaces import LocalStore
from portfolio_cms.application.services.edit_mode_session import EditModeSession
from portfolio_cms.application.services.editable_field import EditableField
from portfolio_cms.application.services.page_catalogue import PageSpec, TextFieldSpec
from portfolio_cms.application.services.page_loader import PageLoader
from portfolio_cms.application.services.remote_record_client import RemoteRecordClient
from portfolio_cms.domain.entities import (
    HOME_DATA,
    UNCATEGORIZED,
    Collection,
    EntityRecord,
    HomeData,
    get_spec,
)
from portfolio_cms.domain.exceptions import (
    EditModeDisabledError,
    EntityNotFoundError,
    InputValidationError,
    RecordStoreError,
)

logger = logging.getLogger(__name__)

# Field values a freshly added item starts with
ITEM_TEMPLATES: dict[Collection, dict[str, Any]] = {
    Collection.SKILLS: {"name": "New Skill", "icon": "🔧", "logo": ""},
    Collection.EXPERIENCE: {
        "title": "New Position",
        "company": "Company Name",
        "date": "Month Year - Present",
        "description": "Job description",
        "responsibilities": ["Responsibility 1", "Responsibility 2"],
    },
    Collection.EDUCATION: {
        "degree": "New Degree",
        "institution": "Institution Name",
        "date": "Year",
        "description": "Description",
    },
    Collection.PROJECTS: {
        "title": "New Project",
        "description": "Project description",
        "categories": [UNCATEGORIZED],
        "technologies": [],
    },
    Collection.ACHIEVEMENTS: {
        "title": "New Achievement",
        "date": "Date",
        "description": "Description",
        "link": "",
        "icon": "🏆",
    },
    Collection.CERTIFICATIONS: {
        "name": "New Certification",
        "issuer": "Issuing Organization",
        "date": "Month Year",
        "url": "",
        "image": "",
    },
    Collection.QUICK_LINKS: {"title": "New Link", "description": "Description", "link": "/", "logo": ""},
    Collection.SOCIAL_LINKS: {"platform": "New Platform", "link": "", "logo": ""},
}

# Collection → field holding its uploaded image URL
IMAGE_FIELDS: dict[Collection, str] = {
    Collection.SKILLS: "logo",
    Collection.QUICK_LINKS: "logo",
    Collection.SOCIAL_LINKS: "logo",
    Collection.CERTIFICATIONS: "image",
}

PROFILE_PHOTO_FOLDER = "images"


class PageEditor:
    """Applies owner edits to a page's texts and collections."""

    def __init__(
        self,
        client: RemoteRecordClient,
        loader: PageLoader,
        local_store: LocalStore,
        edit_session: EditModeSession,
    ) -> None:
        self._client = client
        self._loader = loader
        self._local = local_store
        self._edit = edit_session

    # ── Helpers ─────────────────────────────────────────────────────

    @staticmethod
    def _check_collection(page: PageSpec, collection: Collection) -> Collection:
        collection = Collection(collection)
        if collection not in page.collections:
            raise EntityNotFoundError("Collection", f"{page.name}/{collection.value}")
        return collection

    def _home_field_writer(self, remote_field: str):
        async def persist(value: str) -> None:
            saved = await self._client.update_home_data({remote_field: value})
            if saved is None:
                raise RecordStoreError("update", HOME_DATA, "Failed to save. Please try again.")

        return persist

    # ── Text fields ─────────────────────────────────────────────────

    async def text_field(self, page: PageSpec, spec: TextFieldSpec) -> EditableField:
        """Build the controller for one page text.

        Remote-backed fields start from the stored home-data value, not from
        its local or default fallbacks.
        """
        if spec.remote_field is not None:
            home = await self._loader.load_home_data()
            stored = home.get(spec.remote_field) if home is not None else None
            return EditableField(
                stored or "",
                on_commit=self._home_field_writer(spec.remote_field),
                can_edit=self._edit.can_edit,
                multiline=spec.multiline,
            )
        return EditableField(
            spec.default,
            storage_key=spec.local_key,
            local_store=self._local,
            can_edit=self._edit.can_edit,
            multiline=spec.multiline,
        )

    async def commit_text(self, page: PageSpec, field_name: str, value: str) -> str:
        """Edit and commit one page text; returns the value now displayed."""
        spec = page.text_field(field_name)
        if spec is None:
            raise EntityNotFoundError("Field", f"{page.name}/{field_name}")
        if spec.remote_field is None and len(value) > 5000:
            raise InputValidationError(field_name, "Text must be less than 5000 characters")

        controller = await self.text_field(page, spec)
        if not controller.begin_edit():
            raise EditModeDisabledError()
        controller.input(value)
        await controller.commit()
        return controller.display_value

    # ── Collection items ────────────────────────────────────────────

    async def add_item(
        self, page: PageSpec, collection: Collection, fields: dict[str, Any] | None = None
    ) -> EntityRecord:
        self._edit.require_edit()
        collection = self._check_collection(page, collection)
        values = {**ITEM_TEMPLATES[collection], **(fields or {})}
        if get_spec(collection).ordered:
            current = await self._client.fetch_all(collection)
            values["display_order"] = len(current)

        created = await self._client.create(collection, values)
        if created is None:
            raise RecordStoreError("create", collection.value, "Failed to add item. Please try again.")
        logger.info("Added %s/%s", collection.value, created.id)
        return created

    async def update_item(
        self, page: PageSpec, collection: Collection, record_id: int, fields: dict[str, Any]
    ) -> EntityRecord:
        self._edit.require_edit()
        collection = self._check_collection(page, collection)
        known = set(get_spec(collection).entity_type.field_names())
        unknown = sorted(set(fields) - known)
        if unknown:
            raise InputValidationError(unknown[0], f"Unknown field '{unknown[0]}' for {collection.value}")

        updated = await self._client.update(collection, record_id, fields)
        if updated is None:
            raise RecordStoreError("update", collection.value, "Failed to save changes. Please try again.")
        return updated

    async def delete_item(self, page: PageSpec, collection: Collection, record_id: int) -> None:
        self._edit.require_edit()
        collection = self._check_collection(page, collection)
        if not await self._client.delete(collection, record_id):
            raise RecordStoreError("delete", collection.value, "Failed to delete item. Please try again.")
        logger.info("Deleted %s/%s", collection.value, record_id)

    # ── Images ──────────────────────────────────────────────────────

    async def upload_item_image(
        self,
        page: PageSpec,
        collection: Collection,
        record_id: int,
        content: bytes,
        filename: str,
    ) -> EntityRecord:
        """Replace an item's image: delete the old file, upload, then update the item."""
        self._edit.require_edit()
        collection = self._check_collection(page, collection)
        image_field = IMAGE_FIELDS.get(collection)
        if image_field is None:
            raise InputValidationError("collection", f"{collection.value} items have no image")

        record = await self._client.fetch_one(collection, record_id)
        if record is None:
            raise EntityNotFoundError(collection.value, record_id)

        old_url = getattr(record, image_field, "")
        if old_url:
            await self._client.delete_file(old_url)

        url = await self._client.upload_file(content, filename, collection.value)
        if url is None:
            if old_url:
                # the old file is gone; do not leave the item pointing at it
                await self._client.update(collection, record_id, {image_field: ""})
            raise RecordStoreError("upload", collection.value, "Failed to upload image. Please try again.")
        return await self.update_item(page, collection, record_id, {image_field: url})

    async def upload_profile_photo(self, page: PageSpec, content: bytes, filename: str) -> HomeData:
        self._edit.require_edit()
        if not page.shows_profile_photo:
            raise EntityNotFoundError("Profile photo", page.name)

        url = await self._client.upload_file(content, filename, PROFILE_PHOTO_FOLDER)
        if url is None:
            raise RecordStoreError("upload", HOME_DATA, "Failed to upload photo. Please try again.")
        saved = await self._client.update_home_data({"profile_photo": url})
        if saved is None:
            raise RecordStoreError("update", HOME_DATA, "Failed to save photo. Please try again.")
        return saved
