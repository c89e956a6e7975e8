"""
Settings service - privacy flag and interests per user
"""
from typing import List
from uuid import UUID
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.setting import Setting
from app.schemas.setting import SettingsUpdate
from app.services.user_service import user_service
from app.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for per-user settings"""

    def find_or_create(self, db: Session, user_id: UUID) -> Setting:
        """Get the user's settings, creating defaults on first access"""
        user = user_service.get_user(db, user_id)

        setting = db.query(Setting).filter(Setting.user_id == user.id).first()
        if setting:
            return setting

        setting = Setting(user_id=user.id, interests=[])
        db.add(setting)
        try:
            db.commit()
        except IntegrityError:
            # Another request created them first
            db.rollback()
            logger.warning(f"Settings for user {user.id} were created concurrently")
            return db.query(Setting).filter(Setting.user_id == user.id).one()

        db.refresh(setting)
        logger.info(f"Created default settings for user {user.id}")
        return setting

    def update(self, db: Session, user_id: UUID, update_data: SettingsUpdate) -> Setting:
        setting = self.find_or_create(db, user_id)

        update_dict = update_data.model_dump(exclude_unset=True)
        for field, value in update_dict.items():
            if value is None:
                continue
            setattr(setting, field, list(value) if field == "interests" else value)

        setting.updated_at = utc_now()
        db.commit()
        db.refresh(setting)

        logger.info(f"Updated settings for user {user_id}: {sorted(update_dict)}")
        return setting

    def is_private(self, db: Session, user_id: UUID) -> bool:
        """Whether follows of this user go through a follow request"""
        return bool(self.find_or_create(db, user_id).is_private)

    def get_interests(self, db: Session, user_id: UUID) -> List[str]:
        return list(self.find_or_create(db, user_id).interests or [])


settings_service = SettingsService()
