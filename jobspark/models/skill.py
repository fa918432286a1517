from jobspark.models.base import BaseModel


class Skill(BaseModel):
    table = 'skills'

    @classmethod
    def count_for_user(cls, user_id: int | str, category: str | None = None) -> int:
        if category is None:
            return cls.count('user_id = %s', (str(user_id),))
        return cls.count('user_id = %s AND category = %s', (str(user_id), category))
