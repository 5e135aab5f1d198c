# aacshare/app/repositories/audio.py
"""
Audio catalog: metadata rows, owner-scoped updates and the list query.

The list query returns one flat row per (audio, share) pair and
``fold_audio_rows`` turns those rows into one record per audio with its
shares nested inside.
"""
from typing import Iterable, List, Mapping

from sqlalchemy import case, exists, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from aacshare.app.core.errors import AudioNotFound, EmptyUpdate, NotOwnerOrNotFound, UnknownOrderType
from aacshare.app.models.audio import Audio
from aacshare.app.models.share import Share
from aacshare.app.models.user import User
from aacshare.app.schemas.audio import AudioListResponse, AudioRecord, DownloadAudio, SharedUser

ORDER_OWNER = "owner"
ORDER_ALPHABET = "alphabet"
ORDER_TYPES = (ORDER_OWNER, ORDER_ALPHABET)

# Columns that identify one audio in a flat list row
_AUDIO_COLUMNS = ("audio_id", "title", "is_owner", "owner_id", "owner_name")


def fold_audio_rows(rows: Iterable[Mapping]) -> List[AudioRecord]:
    """
    Fold flat (audio, share) rows into one AudioRecord per audio.

    Single pass over ``rows`` in the order given. All rows of one audio must
    be adjacent; the list query guarantees it by ending its ORDER BY with the
    audio id. Rows whose share columns are NULL add no share, so an audio
    nobody can see besides its owner keeps ``shared_to=None``.
    """
    records: List[AudioRecord] = []
    last_key = None

    for row in rows:
        key = tuple(row[column] for column in _AUDIO_COLUMNS)
        if key != last_key:
            records.append(
                AudioRecord(
                    id=row["audio_id"],
                    name=row["title"],
                    is_owner=bool(row["is_owner"]),
                    owner_id=row["owner_id"],
                    owner_name=row["owner_name"],
                )
            )
            last_key = key

        if row["shared_to_id"] is not None:
            record = records[-1]
            if record.shared_to is None:
                record.shared_to = []
            record.shared_to.append(
                SharedUser(id=row["shared_to_id"], name=row["shared_to_name"])
            )

    return records


def _ordering(order_type: str, is_owner, owner_name, title, audio_id) -> list:
    if order_type == ORDER_OWNER:
        return [is_owner.desc(), owner_name, title, audio_id]
    return [title, audio_id]


def _visible_to(user_id: int):
    shared_with_user = select(Share.audio_id).where(Share.user_id == user_id)
    return or_(Audio.user_id == user_id, Audio.id.in_(shared_with_user))


class AudioRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def upload_file(self, user_id: int, file_path: str) -> int:
        stmt = (
            insert(Audio)
            .values(user_id=user_id, title="", duration=0, file_path=file_path)
            .returning(Audio.id)
        )
        result = await self.db.execute(stmt)
        audio_id = result.scalar_one()
        await self.db.commit()
        return audio_id

    async def add_description(self, user_id: int, audio_id: int, changes: dict) -> None:
        if not changes:
            raise EmptyUpdate()

        stmt = (
            update(Audio)
            .where(Audio.id == audio_id, Audio.user_id == user_id)
            .values(**changes)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotOwnerOrNotFound()
        await self.db.commit()

    async def download_file(self, user_id: int, audio_id: int) -> DownloadAudio:
        shared_with_user = exists().where(
            Share.audio_id == Audio.id, Share.user_id == user_id
        )
        result = await self.db.execute(
            select(Audio.title, Audio.file_path).where(
                Audio.id == audio_id,
                or_(Audio.user_id == user_id, shared_with_user),
            )
        )
        row = result.first()
        if row is None:
            raise AudioNotFound()
        return DownloadAudio(title=row.title, file_path=row.file_path)

    async def get_audio_list(
        self, user_id: int, offset: int, limit: int, order_type: str
    ) -> AudioListResponse:
        if order_type not in ORDER_TYPES:
            raise UnknownOrderType()

        is_owner = case((Audio.user_id == user_id, True), else_=False).label("is_owner")

        # The window count runs before OFFSET/LIMIT, so it is the total
        # number of visible audios, not the page size.
        page = (
            select(
                func.count().over().label("full_count"),
                Audio.id.label("audio_id"),
                Audio.title.label("title"),
                is_owner,
                Audio.user_id.label("owner_id"),
                User.name.label("owner_name"),
            )
            .join(User, User.id == Audio.user_id)
            .where(_visible_to(user_id))
            .order_by(*_ordering(order_type, is_owner, User.name, Audio.title, Audio.id))
            .offset(offset)
            .limit(limit)
            .subquery("page")
        )

        shared_user = aliased(User, name="shared_user")
        stmt = (
            select(
                page,
                shared_user.id.label("shared_to_id"),
                shared_user.name.label("shared_to_name"),
            )
            .select_from(page)
            .outerjoin(Share, Share.audio_id == page.c.audio_id)
            .outerjoin(shared_user, shared_user.id == Share.user_id)
            .order_by(
                *_ordering(order_type, page.c.is_owner, page.c.owner_name, page.c.title, page.c.audio_id),
                shared_user.name,
                shared_user.id,
            )
        )

        result = await self.db.execute(stmt)
        rows = result.mappings().all()

        if rows:
            total_count = rows[0]["full_count"]
        else:
            total_count = await self._count_visible(user_id) if offset > 0 else 0

        return AudioListResponse(total_count=total_count, records=fold_audio_rows(rows))

    async def _count_visible(self, user_id: int) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(Audio).where(_visible_to(user_id))
        )
        return result.scalar_one()
