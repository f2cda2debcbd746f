"""
Settings Repository
Key/value settings written by the settings form
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fluidtrack.domain.errors import DataSourceUnavailable
from fluidtrack.infrastructure.db.models import SettingModel


class SettingsRepository:
    """Repository for stored settings"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_setting(self, key: str) -> Optional[str]:
        try:
            model = await self.session.get(SettingModel, key)
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable(f"Could not read setting {key}") from exc
        return model.value if model else None

    async def get_all(self) -> dict[str, Optional[str]]:
        """
        Every stored setting in one query

        Raises:
            DataSourceUnavailable: the settings table could not be read
        """
        try:
            result = await self.session.execute(select(SettingModel))
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable("Could not load settings") from exc
        return {row.key: row.value for row in result.scalars().all()}

    async def set_many(self, values: dict[str, Optional[str]]) -> None:
        try:
            for key, value in values.items():
                model = await self.session.get(SettingModel, key)
                if model is None:
                    self.session.add(SettingModel(key=key, value=value))
                else:
                    model.value = value
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable("Could not save settings") from exc
