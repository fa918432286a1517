import logging

from jobspark.database.db_manager import DBManager

logger = logging.getLogger(__name__)


def init_schema(db: DBManager):
    '''Create the database schema if it doesn't already exist.'''

    # --- USER ACHIEVEMENTS TABLE ---
    # One row per earned achievement; the unique pair is the double-award guard
    db.execute(
        '''
        CREATE TABLE IF NOT EXISTS user_achievements (
            id BIGSERIAL PRIMARY KEY,
            user_id TEXT NOT NULL,
            achievement_id TEXT NOT NULL,
            earned_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            progress DOUBLE PRECISION NOT NULL DEFAULT 1,
            metadata JSONB NOT NULL DEFAULT '{}'::jsonb,
            CONSTRAINT uq_user_achievements_user_achievement
                UNIQUE (user_id, achievement_id)
        )
        '''
    )

    # --- ANALYTICS EVENTS TABLE ---
    db.execute(
        '''
        CREATE TABLE IF NOT EXISTS analytics_events (
            id BIGSERIAL PRIMARY KEY,
            user_id TEXT NOT NULL,
            event_type TEXT NOT NULL,
            event_data JSONB NOT NULL DEFAULT '{}'::jsonb,
            timestamp TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            session_id TEXT DEFAULT NULL,
            platform TEXT DEFAULT NULL,
            app_version TEXT DEFAULT NULL
        )
        '''
    )

    # --- USER SESSIONS TABLE ---
    db.execute(
        '''
        CREATE TABLE IF NOT EXISTS user_sessions (
            id BIGSERIAL PRIMARY KEY,
            user_id TEXT NOT NULL,
            session_start TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            session_end TIMESTAMPTZ DEFAULT NULL,
            duration_seconds INTEGER DEFAULT NULL,
            page_views INTEGER NOT NULL DEFAULT 0,
            actions_taken INTEGER NOT NULL DEFAULT 0,
            platform TEXT DEFAULT NULL
        )
        '''
    )

    # --- PROFILES TABLE ---
    db.execute(
        '''
        CREATE TABLE IF NOT EXISTS profiles (
            user_id TEXT PRIMARY KEY,
            first_name TEXT DEFAULT NULL,
            last_name TEXT DEFAULT NULL,
            profile_completed BOOLEAN NOT NULL DEFAULT FALSE,
            completed_at TIMESTAMPTZ DEFAULT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
        '''
    )

    # --- SKILLS TABLE ---
    db.execute(
        '''
        CREATE TABLE IF NOT EXISTS skills (
            id BIGSERIAL PRIMARY KEY,
            user_id TEXT NOT NULL,
            name TEXT NOT NULL,
            category TEXT NOT NULL DEFAULT 'technical',
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
        '''
    )

    # --- NOTIFICATIONS TABLE ---
    db.execute(
        '''
        CREATE TABLE IF NOT EXISTS notifications (
            id BIGSERIAL PRIMARY KEY,
            user_id TEXT NOT NULL,
            title TEXT NOT NULL,
            message TEXT NOT NULL,
            type TEXT NOT NULL,
            priority TEXT NOT NULL DEFAULT 'medium',
            read BOOLEAN NOT NULL DEFAULT FALSE,
            action_url TEXT DEFAULT NULL,
            action_data JSONB NOT NULL DEFAULT '{}'::jsonb,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
        '''
    )

    # --- MIGRATIONS TABLE ---
    db.execute(
        '''
        CREATE TABLE IF NOT EXISTS migrations (
            id BIGSERIAL PRIMARY KEY,
            filename TEXT NOT NULL UNIQUE,
            applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
        '''
    )

    # --- INDEXES ---
    db.execute(
        'CREATE INDEX IF NOT EXISTS idx_user_achievements_user_id '
        'ON user_achievements(user_id);'
    )
    db.execute(
        'CREATE INDEX IF NOT EXISTS idx_analytics_events_user_type '
        'ON analytics_events(user_id, event_type);'
    )
    db.execute(
        'CREATE INDEX IF NOT EXISTS idx_user_sessions_user_start '
        'ON user_sessions(user_id, session_start);'
    )
    db.execute('CREATE INDEX IF NOT EXISTS idx_skills_user_id ON skills(user_id);')

    # --- TRIGGER: profiles.completed_at follows profile_completed ---
    db.execute(
        '''
        CREATE OR REPLACE FUNCTION set_profile_completed_at()
        RETURNS TRIGGER AS $$
        BEGIN
            IF NEW.profile_completed AND NEW.completed_at IS NULL THEN
                NEW.completed_at := NOW();
            ELSIF NOT NEW.profile_completed THEN
                NEW.completed_at := NULL;
            END IF;
            NEW.updated_at := NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
        '''
    )
    db.execute('DROP TRIGGER IF EXISTS profiles_completed_at ON profiles;')
    db.execute(
        '''
        CREATE TRIGGER profiles_completed_at
        BEFORE INSERT OR UPDATE ON profiles
        FOR EACH ROW EXECUTE FUNCTION set_profile_completed_at();
        '''
    )
    logger.debug('Schema statements applied')
