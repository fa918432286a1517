from typing import Any, Optional

from jobspark.models.base import BaseModel


class Profile(BaseModel):
    table = 'profiles'
    pk = 'user_id'

    @classmethod
    def for_user(cls, user_id: int | str) -> Optional[dict[str, Any]]:
        return cls.get(str(user_id))
