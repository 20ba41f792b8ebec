"""Tests for image and audio uploads."""

import pytest

from modules.otp.exceptions import OTPRequiredError
from modules.uploads.clients import sign_params
from modules.uploads.exceptions import (
    AudioUploadRestrictedError,
    FileTooLargeError,
    InvalidFileTypeError,
    MissingFileError,
)
from modules.uploads.models import MAX_IMAGE_BYTES
from modules.uploads.service import check_file
from tests.conftest import local_time

AUDIO = b"ID3" + b"\x00" * 1024


@pytest.fixture
def service(container):
    return container.uploads


@pytest.fixture
def audio_hours(clock):
    clock.set(local_time(15, 0))
    return clock


async def verified_otp(container, email_sender, user_id) -> str:
    await container.otp.request_otp(user_id)
    response = await container.otp.verify_otp(user_id, email_sender.last_code())
    return response.otp_id


class TestCheckFile:
    def test_missing(self):
        with pytest.raises(MissingFileError):
            check_file("image", "image/png", b"", MAX_IMAGE_BYTES)

    def test_wrong_type(self):
        with pytest.raises(InvalidFileTypeError, match="Only image files are allowed"):
            check_file("image", "application/pdf", b"%PDF", MAX_IMAGE_BYTES)

    def test_no_type(self):
        with pytest.raises(InvalidFileTypeError):
            check_file("audio", None, AUDIO, 10_000)

    def test_too_large(self):
        with pytest.raises(FileTooLargeError):
            check_file("image", "image/png", b"x" * 11, 10)


class TestImageUpload:
    @pytest.mark.asyncio
    async def test_upload(self, service, image_host):
        response = await service.upload_image("cat.png", "image/png", b"\x89PNG")
        assert response.url == "https://images.test/cat.png"
        assert image_host.uploads == [("cat.png", 4)]


class TestAudioUpload:
    @pytest.mark.asyncio
    async def test_requires_otp(self, service, audio_hours, audio_host, alice):
        with pytest.raises(OTPRequiredError):
            await service.upload_audio(alice.id, None, "a.mp3", "audio/mpeg", AUDIO)
        assert audio_host.uploads == []

    @pytest.mark.asyncio
    async def test_upload_consumes_code(self, service, container, email_sender, audio_hours, alice):
        otp_id = await verified_otp(container, email_sender, alice.id)

        response = await service.upload_audio(alice.id, otp_id, "a.mp3", "audio/mpeg", AUDIO, duration=42)

        assert response.url == "https://audio.test/a.mp3"
        assert response.size == len(AUDIO)
        assert response.duration == 42
        with pytest.raises(OTPRequiredError):
            await service.upload_audio(alice.id, otp_id, "b.mp3", "audio/mpeg", AUDIO)

    @pytest.mark.asyncio
    async def test_outside_window(self, service, container, email_sender, clock, alice):
        otp_id = await verified_otp(container, email_sender, alice.id)

        with pytest.raises(AudioUploadRestrictedError):
            await service.upload_audio(alice.id, otp_id, "a.mp3", "audio/mpeg", AUDIO)

    @pytest.mark.asyncio
    async def test_other_users_code(self, service, container, email_sender, audio_hours, alice, bob):
        otp_id = await verified_otp(container, email_sender, alice.id)
        with pytest.raises(OTPRequiredError):
            await service.upload_audio(bob.id, otp_id, "a.mp3", "audio/mpeg", AUDIO)

    @pytest.mark.asyncio
    async def test_expired_code(self, service, container, email_sender, audio_hours, alice):
        otp_id = await verified_otp(container, email_sender, alice.id)
        audio_hours.advance(minutes=11)
        with pytest.raises(OTPRequiredError):
            await service.upload_audio(alice.id, otp_id, "a.mp3", "audio/mpeg", AUDIO)

    @pytest.mark.asyncio
    async def test_rejected_file_keeps_code(self, service, container, email_sender, audio_hours, alice):
        otp_id = await verified_otp(container, email_sender, alice.id)
        with pytest.raises(InvalidFileTypeError):
            await service.upload_audio(alice.id, otp_id, "a.png", "image/png", AUDIO)

        await service.upload_audio(alice.id, otp_id, "a.mp3", "audio/mpeg", AUDIO)


class TestCloudinarySignature:
    def test_sorted_params(self):
        import hashlib

        params = {"timestamp": "1700000000", "folder": "chirp/audio"}
        expected = hashlib.sha1(b"folder=chirp/audio&timestamp=1700000000secret").hexdigest()
        assert sign_params(params, "secret") == expected
