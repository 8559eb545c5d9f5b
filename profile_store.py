from recommendation_config import RecommendationConfig
from user_profile import UserProfile
from typing import Optional, Dict, Any
from pathlib import Path
import structlog
import json
import os
import tempfile
import redis

logger = structlog.get_logger()

class ProfileStore:
    """Persists the local user profile using one of several storage strategies"""
    def __init__(self, config: RecommendationConfig, redis_client: Optional[redis.Redis] = None):
        self.config = config
        self.strategy = self.config.get('profile_store', 'file')
        self.profile_path = Path(self.config.profile_path)
        self.redis_key = self.config.get('redis_key', 'recommendationAppUserState')
        self.client = redis_client
        self._memory: Optional[str] = None
        self._setup_store()

    def _setup_store(self):
        """Setup storage based on strategy"""
        if self.strategy == 'redis':
            self._setup_redis_store()
        elif self.strategy in ('file', 'memory'):
            logger.info(f"Profile store configured with strategy={self.strategy}")
        else:
            logger.warning(f"Profile store strategy '{self.strategy}' not available, using file")
            self.strategy = 'file'

    def _setup_redis_store(self):
        """Setup Redis store"""
        try:
            if self.client is None:
                host = self.config.get('redis_host', 'localhost')
                port = self.config.get('redis_port', 6379)
                password = self.config.get('redis_password')

                self.client = redis.Redis(
                    host=host,
                    port=port,
                    password=password,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5
                )

            # Test connection
            self.client.ping()
            logger.info("Redis profile store configured", redis_key=self.redis_key)

        except redis.RedisError as e:
            logger.warning(f"Redis setup failed: {e}. Falling back to file store")
            self.client = None
            self.strategy = 'file'

    def _read_raw(self) -> Optional[str]:
        if self.strategy == 'redis':
            raw = self.client.get(self.redis_key)
            if isinstance(raw, bytes):
                raw = raw.decode('utf-8')
            return raw
        if self.strategy == 'memory':
            return self._memory
        if not self.profile_path.exists():
            return None
        with open(self.profile_path, 'r', encoding='utf-8') as f:
            return f.read()

    def _write_raw(self, payload: str) -> None:
        if self.strategy == 'redis':
            self.client.set(self.redis_key, payload)
        elif self.strategy == 'memory':
            self._memory = payload
        else:
            os.makedirs(self.profile_path.parent, exist_ok=True)
            # Write beside the target and swap it in so a failed write keeps the old profile
            fd, tmp_path = tempfile.mkstemp(dir=self.profile_path.parent, prefix='.user_profile.', suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(payload)
                os.replace(tmp_path, self.profile_path)
            finally:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)

    def load(self) -> Optional[UserProfile]:
        """Load the stored profile, or None when nothing usable is stored"""
        try:
            raw = self._read_raw()
        except (OSError, redis.RedisError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read saved user state: {e}")
            return None

        if raw is None:
            logger.info("No saved user state found", strategy=self.strategy)
            return None

        try:
            profile = UserProfile.from_dict(json.loads(raw), store=self)
        except ValueError as e:
            # json.JSONDecodeError and InvalidRatingError are both ValueErrors
            logger.error(f"Failed to parse saved user state: {e}")
            return None

        logger.info("User state loaded", liked=len(profile.liked_item_ids),
                    rated=len(profile.ratings), strategy=self.strategy)
        return profile

    def load_or_create(self) -> UserProfile:
        """Stored profile, or a fresh empty one bound to this store"""
        profile = self.load()
        if profile is None:
            profile = UserProfile(store=self)
        return profile

    def save(self, profile: UserProfile) -> bool:
        """Save the full profile; returns False on failure"""
        document: Dict[str, Any] = profile.to_dict()
        try:
            self._write_raw(json.dumps(document))
            return True
        except (OSError, redis.RedisError) as e:
            logger.error(f"Error saving user state: {e}")
            return False

    def clear(self) -> bool:
        """Remove the stored profile document"""
        try:
            if self.strategy == 'redis':
                self.client.delete(self.redis_key)
            elif self.strategy == 'memory':
                self._memory = None
            elif self.profile_path.exists():
                self.profile_path.unlink()
            logger.info("Saved user state cleared", strategy=self.strategy)
            return True
        except (OSError, redis.RedisError) as e:
            logger.warning(f"Error clearing saved user state: {e}")
            return False
