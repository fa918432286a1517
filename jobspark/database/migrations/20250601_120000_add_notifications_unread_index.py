from jobspark.database.db_manager import DBManager


def up(db_manager: DBManager):
    db_manager.execute(
        'CREATE INDEX IF NOT EXISTS idx_notifications_user_unread '
        'ON notifications(user_id) WHERE read = FALSE'
    )


def down(db_manager: DBManager):
    db_manager.execute('DROP INDEX IF EXISTS idx_notifications_user_unread')
    db_manager.execute(
        'DELETE FROM migrations '
        "WHERE filename = '20250601_120000_add_notifications_unread_index.py'"
    )
