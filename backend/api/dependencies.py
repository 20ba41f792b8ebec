"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Repositories are Supabase-backed unless ``STORAGE_BACKEND=memory``. Tests
build a container with in-memory storage, recording senders and a fixed
clock, and install it with ``app.dependency_overrides[get_container]``.
"""

from typing import TYPE_CHECKING, Any, Optional

from fastapi import Depends

from shared.config import Settings, get_settings
from shared.schedule import Clock, utc_now

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.fingerprint import GeoLocator
    from modules.auth.interfaces import IAuthService
    from modules.language.interfaces import ILanguageService
    from modules.notifications.interfaces import IEmailSender, ISmsSender
    from modules.notifications.mailer import Mailer
    from modules.otp.interfaces import IOTPRepository, IOTPService
    from modules.password_reset.interfaces import (
        IPasswordResetRepository,
        IPasswordResetService,
    )
    from modules.subscriptions.interfaces import (
        IPaymentGateway,
        IPaymentRepository,
        ISubscriptionRepository,
        ISubscriptionService,
    )
    from modules.tweets.interfaces import ITweetRepository, ITweetService
    from modules.uploads.interfaces import IAudioHost, IImageHost, IUploadService
    from modules.users.interfaces import IUserRepository, IUserService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        clock: Clock = utc_now,
        email_sender: "Optional[IEmailSender]" = None,
        sms_sender: "Optional[ISmsSender]" = None,
        payment_gateway: "Optional[IPaymentGateway]" = None,
        image_host: "Optional[IImageHost]" = None,
        audio_host: "Optional[IAudioHost]" = None,
    ) -> None:
        self._settings = settings
        self.clock = clock
        self._overrides: dict[str, Any] = {
            "email_sender": email_sender,
            "sms_sender": sms_sender,
            "payment_gateway": payment_gateway,
            "image_host": image_host,
            "audio_host": audio_host,
        }
        self._instances: dict[str, Any] = {}

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def _cached(self, name: str, factory):
        if name not in self._instances:
            override = self._overrides.get(name)
            self._instances[name] = override if override is not None else factory()
        return self._instances[name]

    def _repository(self, memory_cls, supabase_cls):
        if self.settings.storage_backend == "memory":
            return memory_cls()
        from shared.database import get_supabase_client
        return supabase_cls(get_supabase_client())

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def user_repository(self) -> "IUserRepository":
        from modules.users.repository import InMemoryUserRepository, SupabaseUserRepository
        return self._cached(
            "user_repository",
            lambda: self._repository(InMemoryUserRepository, SupabaseUserRepository),
        )

    @property
    def tweet_repository(self) -> "ITweetRepository":
        from modules.tweets.repository import InMemoryTweetRepository, SupabaseTweetRepository
        return self._cached(
            "tweet_repository",
            lambda: self._repository(InMemoryTweetRepository, SupabaseTweetRepository),
        )

    @property
    def subscription_repository(self) -> "ISubscriptionRepository":
        from modules.subscriptions.repository import (
            InMemorySubscriptionRepository,
            SupabaseSubscriptionRepository,
        )
        return self._cached(
            "subscription_repository",
            lambda: self._repository(InMemorySubscriptionRepository, SupabaseSubscriptionRepository),
        )

    @property
    def payment_repository(self) -> "IPaymentRepository":
        from modules.subscriptions.repository import (
            InMemoryPaymentRepository,
            SupabasePaymentRepository,
        )
        return self._cached(
            "payment_repository",
            lambda: self._repository(InMemoryPaymentRepository, SupabasePaymentRepository),
        )

    @property
    def otp_repository(self) -> "IOTPRepository":
        from modules.otp.repository import InMemoryOTPRepository, SupabaseOTPRepository
        return self._cached(
            "otp_repository",
            lambda: self._repository(InMemoryOTPRepository, SupabaseOTPRepository),
        )

    @property
    def password_reset_repository(self) -> "IPasswordResetRepository":
        from modules.password_reset.repository import (
            InMemoryPasswordResetRepository,
            SupabasePasswordResetRepository,
        )
        return self._cached(
            "password_reset_repository",
            lambda: self._repository(InMemoryPasswordResetRepository, SupabasePasswordResetRepository),
        )

    # -------------------------------------------------------------------------
    # External collaborators
    # -------------------------------------------------------------------------

    @property
    def email_sender(self) -> "IEmailSender":
        from modules.notifications.senders import ResendEmailSender
        return self._cached(
            "email_sender",
            lambda: ResendEmailSender(self.settings.resend_api_key, self.settings.email_from),
        )

    @property
    def sms_sender(self) -> "ISmsSender":
        from modules.notifications.senders import TwilioSmsSender
        return self._cached(
            "sms_sender",
            lambda: TwilioSmsSender(
                self.settings.twilio_account_sid,
                self.settings.twilio_auth_token,
                self.settings.twilio_phone_number,
            ),
        )

    @property
    def mailer(self) -> "Mailer":
        from modules.notifications.mailer import Mailer
        return self._cached(
            "mailer",
            lambda: Mailer(self.email_sender, self.settings.app_name, self.settings.frontend_url),
        )

    @property
    def payment_gateway(self) -> "IPaymentGateway":
        from modules.subscriptions.gateway import RazorpayGateway
        return self._cached(
            "payment_gateway",
            lambda: RazorpayGateway(self.settings.razorpay_key_id, self.settings.razorpay_key_secret),
        )

    @property
    def image_host(self) -> "IImageHost":
        from modules.uploads.clients import ImgBBClient
        return self._cached("image_host", lambda: ImgBBClient(self.settings.imgbb_api_key))

    @property
    def audio_host(self) -> "IAudioHost":
        from modules.uploads.clients import CloudinaryClient
        return self._cached(
            "audio_host",
            lambda: CloudinaryClient(
                self.settings.cloudinary_cloud_name,
                self.settings.cloudinary_api_key,
                self.settings.cloudinary_api_secret,
            ),
        )

    @property
    def geolocator(self) -> "GeoLocator":
        from modules.auth.fingerprint import GeoLocator
        return self._cached("geolocator", lambda: GeoLocator(self.settings.geoip_database_path))

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        from modules.auth.service import AuthService
        return self._cached(
            "auth",
            lambda: AuthService(self.user_repository, self.mailer, self.settings, self.clock),
        )

    @property
    def users(self) -> "IUserService":
        from modules.users.service import UserService
        return self._cached("users", lambda: UserService(self.user_repository, self.clock))

    @property
    def otp(self) -> "IOTPService":
        from modules.otp.service import OTPService
        return self._cached(
            "otp",
            lambda: OTPService(
                self.otp_repository,
                self.user_repository,
                self.mailer,
                self.settings,
                self.clock,
            ),
        )

    @property
    def language(self) -> "ILanguageService":
        from modules.language.service import LanguageService
        return self._cached(
            "language",
            lambda: LanguageService(
                self.user_repository,
                self.mailer,
                self.sms_sender,
                self.settings,
                self.clock,
            ),
        )

    @property
    def password_reset(self) -> "IPasswordResetService":
        from modules.password_reset.service import PasswordResetService
        return self._cached(
            "password_reset",
            lambda: PasswordResetService(
                self.password_reset_repository,
                self.user_repository,
                self.mailer,
                self.settings,
                self.clock,
            ),
        )

    @property
    def subscriptions(self) -> "ISubscriptionService":
        from modules.subscriptions.service import SubscriptionService
        return self._cached(
            "subscriptions",
            lambda: SubscriptionService(
                self.subscription_repository,
                self.payment_repository,
                self.user_repository,
                self.payment_gateway,
                self.mailer,
                self.settings,
                self.clock,
            ),
        )

    @property
    def tweets(self) -> "ITweetService":
        from modules.tweets.service import TweetService
        return self._cached(
            "tweets",
            lambda: TweetService(
                self.tweet_repository,
                self.user_repository,
                self.subscriptions,
                self.clock,
            ),
        )

    @property
    def uploads(self) -> "IUploadService":
        from modules.uploads.service import UploadService
        return self._cached(
            "uploads",
            lambda: UploadService(
                self.image_host,
                self.audio_host,
                self.otp,
                self.settings,
                self.clock,
            ),
        )

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        geolocator = self._instances.get("geolocator")
        if geolocator is not None:
            geolocator.close()
        self._instances = {}


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    if _container is not None:
        _container.reset()
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_app_settings(container: ServiceContainer = Depends(get_container)) -> Settings:
    return container.settings


def get_geolocator(container: ServiceContainer = Depends(get_container)) -> "GeoLocator":
    return container.geolocator


def get_auth_service(container: ServiceContainer = Depends(get_container)) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return container.auth


def get_user_service(container: ServiceContainer = Depends(get_container)) -> "IUserService":
    """FastAPI dependency for user service."""
    return container.users


def get_otp_service(container: ServiceContainer = Depends(get_container)) -> "IOTPService":
    """FastAPI dependency for audio-upload OTP service."""
    return container.otp


def get_language_service(container: ServiceContainer = Depends(get_container)) -> "ILanguageService":
    """FastAPI dependency for language service."""
    return container.language


def get_password_reset_service(
    container: ServiceContainer = Depends(get_container),
) -> "IPasswordResetService":
    """FastAPI dependency for password reset service."""
    return container.password_reset


def get_subscription_service(
    container: ServiceContainer = Depends(get_container),
) -> "ISubscriptionService":
    """FastAPI dependency for subscription service."""
    return container.subscriptions


def get_tweet_service(container: ServiceContainer = Depends(get_container)) -> "ITweetService":
    """FastAPI dependency for tweet service."""
    return container.tweets


def get_upload_service(container: ServiceContainer = Depends(get_container)) -> "IUploadService":
    """FastAPI dependency for upload service."""
    return container.uploads
