"""Tests for SlideShareClient."""

from __future__ import annotations

import hashlib

import pytest

from slideshare_client.config.models import CacheSettings, Settings
from slideshare_client.models import SlideShow
from slideshare_client.services.cache import JSONFileCache, NullCache
from slideshare_client.services.client import SlideShareClient, compute_signature, encode_tags
from slideshare_client.services.transport import RequestsTransport
from slideshare_client.shared.constants import SlideShareEndpoints
from slideshare_client.shared.errors import (
    CacheError,
    ConfigurationError,
    ErrorCode,
    ProtocolError,
    ServiceError,
    TransportError,
    ValidationError,
)

from samples import (
    EMPTY_USER_XML,
    NOT_FOUND_XML,
    SLIDESHOW_XML,
    TAG_XML,
    UPLOADED_XML,
)


class TestSignature:
    """Test request signing."""

    def test_compute_signature_is_sha1_of_secret_and_timestamp(self):
        expected = hashlib.sha1(b"secret1234567890").hexdigest()  # noqa: S324

        assert compute_signature("secret", 1234567890) == expected

    def test_signed_params_contain_key_timestamp_and_hash(self, uncached_client):
        params = uncached_client._signed_params(timestamp=1000)

        assert params == {
            "api_key": "test_api_key",
            "ts": 1000,
            "hash": compute_signature("test_secret", 1000),
        }

    def test_signed_params_use_current_time(self, uncached_client, mocker):
        mocker.patch("slideshare_client.services.client.time.time", return_value=1700000000.7)

        params = uncached_client._signed_params()

        assert params["ts"] == 1700000000
        assert params["hash"] == compute_signature("test_secret", 1700000000)

    def test_encode_tags_quotes_and_joins(self):
        assert encode_tags(["zend", "php"]) == '"zend" "php"'
        assert encode_tags([]) == ""


class TestClientInitialization:
    """Test client construction and cache selection."""

    def test_injected_cache_and_transport_are_used(self, transport, file_cache):
        client = SlideShareClient("k", "s", transport=transport, cache=file_cache)

        assert client.transport is transport
        assert client.cache is file_cache

    def test_no_default_cache_uses_null_cache(self, transport):
        client = SlideShareClient("k", "s", transport=transport, use_default_cache=False)

        assert isinstance(client.cache, NullCache)

    def test_default_cache_built_from_settings(self, transport, temp_dir):
        settings = Settings(cache=CacheSettings(directory=temp_dir / "c", ttl=60))

        client = SlideShareClient("k", "s", transport=transport, settings=settings)

        assert isinstance(client.cache, JSONFileCache)
        assert client.cache.cache_dir == temp_dir / "c"
        assert client.cache.default_ttl == 60

    def test_disabled_cache_setting_uses_null_cache(self, transport):
        settings = Settings(cache=CacheSettings(enabled=False))

        client = SlideShareClient("k", "s", transport=transport, settings=settings)

        assert isinstance(client.cache, NullCache)

    def test_default_transport_follows_api_settings(self):
        settings = Settings(api={"timeout": 2, "max_redirects": 1}, cache={"enabled": False})

        client = SlideShareClient("k", "s", settings=settings)

        assert isinstance(client.transport, RequestsTransport)
        assert client.transport.timeout == 2
        assert client.transport.max_redirects == 1
        client.close()

    def test_credentials_are_stored_as_strings(self, transport):
        client = SlideShareClient(123, 456, password=789, transport=transport, cache=NullCache())

        assert client.api_key == "123"
        assert client.shared_secret == "456"
        assert client.password == "789"

    def test_from_settings_requires_credentials(self):
        with pytest.raises(ConfigurationError):
            SlideShareClient.from_settings(Settings(cache={"enabled": False}))

    def test_from_settings_builds_client(self):
        settings = Settings(
            api={"api_key": "k", "shared_secret": "s", "username": "u"},
            cache={"enabled": False},
        )

        client = SlideShareClient.from_settings(settings)

        assert client.api_key == "k"
        assert client.shared_secret == "s"
        assert client.username == "u"
        client.close()


class TestUploadSlideshow:
    """Test upload_slideshow."""

    def test_missing_file_raises_before_any_call(self, client, transport, temp_dir):
        slideshow = SlideShow(title="Deck", filename=str(temp_dir / "missing.ppt"))

        with pytest.raises(ValidationError) as exc_info:
            client.upload_slideshow(slideshow)

        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND
        assert transport.calls == []
        assert slideshow.id == 0

    def test_no_filename_raises_validation_error(self, client, transport):
        with pytest.raises(ValidationError):
            client.upload_slideshow(SlideShow(title="Deck"))

        assert transport.calls == []

    def test_missing_credentials_raise_validation_error(
        self, uncached_client, transport, presentation_file
    ):
        slideshow = SlideShow(title="Deck", filename=str(presentation_file))

        with pytest.raises(ValidationError):
            uncached_client.upload_slideshow(slideshow)

        assert transport.calls == []

    def test_successful_upload_sets_id(self, client, transport, presentation_file):
        transport.queue(UPLOADED_XML)
        slideshow = SlideShow(
            title="Deck",
            filename=str(presentation_file),
            tags=["php", "zend framework"],
        )

        result = client.upload_slideshow(slideshow, make_source_public=False)

        assert result is slideshow
        assert slideshow.id == 1234
        assert slideshow.is_uploaded

        call = transport.calls[0]
        assert call.url == SlideShareEndpoints.UPLOAD
        assert call.files == {"slideshow_srcfile": str(presentation_file)}
        assert call.data["username"] == "jdoe"
        assert call.data["password"] == "pw"
        assert call.data["slideshow_title"] == "Deck"
        assert call.data["slideshow_description"] == ""
        assert call.data["slideshow_tags"] == '"php" "zend framework"'
        assert call.data["make_src_public"] == "N"
        assert call.data["hash"] == compute_signature("test_secret", call.data["ts"])

    def test_upload_defaults_to_public_source(self, client, transport, presentation_file):
        transport.queue(UPLOADED_XML)

        client.upload_slideshow(SlideShow(title="Deck", filename=str(presentation_file)))

        assert transport.calls[0].data["make_src_public"] == "Y"
        assert transport.calls[0].data["slideshow_tags"] == ""

    def test_service_error_leaves_id_unset(self, client, transport, presentation_file):
        transport.queue(
            b"<SlideShareServiceError><Message>6: Not a valid file</Message>"
            b"</SlideShareServiceError>"
        )
        slideshow = SlideShow(title="Deck", filename=str(presentation_file))

        with pytest.raises(ServiceError) as exc_info:
            client.upload_slideshow(slideshow)

        assert exc_info.value.service_code == 6
        assert exc_info.value.message == "Not a valid file"
        assert slideshow.id == 0

    def test_unexpected_root_is_protocol_error(self, client, transport, presentation_file):
        transport.queue(b"<Surprise/>")
        slideshow = SlideShow(title="Deck", filename=str(presentation_file))

        with pytest.raises(ProtocolError):
            client.upload_slideshow(slideshow)

        assert slideshow.id == 0

    def test_uploads_are_never_cached(self, client, transport, presentation_file, mocker):
        transport.queue(UPLOADED_XML)
        cache_set = mocker.spy(client.cache, "set")

        client.upload_slideshow(SlideShow(title="Deck", filename=str(presentation_file)))

        cache_set.assert_not_called()


class TestGetSlideshow:
    """Test single-record lookups."""

    def test_get_slideshow_maps_record(self, client, transport):
        transport.queue(SLIDESHOW_XML)

        slideshow = client.get_slideshow(42)

        assert slideshow.id == 42
        assert slideshow.title == "Intro to Testing"
        assert slideshow.tags == ["php", "testing"]
        call = transport.calls[0]
        assert call.url == SlideShareEndpoints.GET_SLIDESHOW
        assert call.data["slideshow_id"] == 42
        assert call.data["detailed"] == 1
        assert "offset" not in call.data
        assert "limit" not in call.data

    def test_second_lookup_is_served_from_cache(self, client, transport):
        transport.queue(SLIDESHOW_XML)

        first = client.get_slideshow(42)
        second = client.get_slideshow(42)

        assert len(transport.calls) == 1
        assert second == first
        assert second is not first

    def test_cache_disabled_always_calls_transport(self, uncached_client, transport):
        transport.queue(SLIDESHOW_XML, SLIDESHOW_XML)

        uncached_client.get_slideshow(42)
        uncached_client.get_slideshow(42)

        assert len(transport.calls) == 2

    def test_get_slideshow_by_url(self, client, transport):
        transport.queue(SLIDESHOW_XML)
        url = "https://www.slideshare.net/jdoe/intro-to-testing"

        slideshow = client.get_slideshow_by_url(url)

        assert slideshow.permalink == url
        assert transport.calls[0].data["slideshow_url"] == url

    def test_not_found_raises_service_error(self, client, transport):
        transport.queue(NOT_FOUND_XML)

        with pytest.raises(ServiceError) as exc_info:
            client.get_slideshow(999)

        assert exc_info.value.service_code == 9
        assert exc_info.value.is_not_found
        assert exc_info.value.code == ErrorCode.SERVICE_NOT_FOUND

    def test_list_document_for_single_lookup_is_protocol_error(self, client, transport):
        transport.queue(TAG_XML)

        with pytest.raises(ProtocolError):
            client.get_slideshow(42)

    def test_transport_error_propagates(self, client, mocker):
        error = TransportError(ErrorCode.NETWORK_ERROR, "Service Request Failed: boom")
        mocker.patch.object(client.transport, "post", side_effect=error)

        with pytest.raises(TransportError) as exc_info:
            client.get_slideshow(42)

        assert exc_info.value is error


class TestListQueries:
    """Test user, tag, group and search queries."""

    def test_tag_list_is_encoded_with_window(self, client, transport):
        transport.queue(TAG_XML)

        slideshows = client.get_slideshows_by_tag(["zend", "php"], 0, 1)

        call = transport.calls[0]
        assert call.url == SlideShareEndpoints.GET_BY_TAG
        assert call.data["tag"] == '"zend" "php"'
        assert call.data["offset"] == 0
        assert call.data["limit"] == 1
        assert [s.id for s in slideshows] == [1, 2]
        assert [s.title for s in slideshows] == ["First", "Second"]

    def test_single_tag_string_is_sent_as_is(self, client, transport):
        transport.queue(TAG_XML)

        client.get_slideshows_by_tag("zend")

        assert transport.calls[0].data["tag"] == "zend"

    def test_empty_result_is_empty_list(self, client, transport):
        transport.queue(EMPTY_USER_XML)

        assert client.get_slideshows_by_username("nobody") == []
        assert transport.calls[0].data["username_for"] == "nobody"

    def test_empty_result_is_cached(self, client, transport):
        transport.queue(EMPTY_USER_XML)

        client.get_slideshows_by_username("nobody")
        assert client.get_slideshows_by_username("nobody") == []

        assert len(transport.calls) == 1

    def test_distinct_windows_cache_independently(self, client, transport):
        transport.queue(TAG_XML, TAG_XML)

        client.get_slideshows_by_tag("zend", 0, 1)
        client.get_slideshows_by_tag("zend", 1, 1)
        client.get_slideshows_by_tag("zend", 0, 1)

        assert len(transport.calls) == 2

    def test_group_query(self, client, transport):
        transport.queue(b"<Group><Slideshow><ID>5</ID></Slideshow></Group>")

        slideshows = client.get_slideshows_by_group("testers")

        assert [s.id for s in slideshows] == [5]
        assert transport.calls[0].url == SlideShareEndpoints.GET_BY_GROUP
        assert transport.calls[0].data["group_name"] == "testers"

    def test_group_value_resembling_window_is_cached_separately(self, client, transport):
        transport.queue(
            b"<Group><Slideshow><ID>5</ID></Slideshow></Group>",
            b"<Group><Slideshow><ID>6</ID></Slideshow></Group>",
        )

        windowed = client.get_slideshows_by_group("g", limit=1)
        lookalike = client.get_slideshows_by_group("g:limit=1")

        assert len(transport.calls) == 2
        assert [s.id for s in windowed] == [5]
        assert [s.id for s in lookalike] == [6]

    def test_search(self, client, transport):
        transport.queue(b"<Slideshows><Meta/><Slideshow><ID>8</ID></Slideshow></Slideshows>")

        slideshows = client.search_slideshows("unit testing", limit=10)

        assert [s.id for s in slideshows] == [8]
        assert transport.calls[0].url == SlideShareEndpoints.SEARCH
        assert transport.calls[0].data["q"] == "unit testing"
        assert transport.calls[0].data["limit"] == 10

    def test_wrong_wrapper_tag_is_protocol_error(self, client, transport):
        transport.queue(TAG_XML)

        with pytest.raises(ProtocolError):
            client.get_slideshows_by_group("testers")

    @pytest.mark.parametrize(("offset", "limit"), [(-1, None), (None, -5), ("1", None)])
    def test_invalid_window_raises_before_any_call(self, client, transport, offset, limit):
        with pytest.raises(ValidationError):
            client.get_slideshows_by_username("jdoe", offset, limit)

        assert transport.calls == []


class TestCacheFailures:
    """Cache problems degrade to uncached calls."""

    def test_cache_write_failure_does_not_fail_call(self, transport, mocker):
        cache = mocker.Mock()
        cache.get.return_value = None
        cache.set.side_effect = CacheError(ErrorCode.CACHE_WRITE_FAILED, "disk full")
        client = SlideShareClient("k", "s", transport=transport, cache=cache)
        transport.queue(SLIDESHOW_XML)

        slideshow = client.get_slideshow(42)

        assert slideshow.id == 42
        cache.set.assert_called_once()

    def test_cache_read_failure_is_a_miss(self, transport, mocker):
        cache = mocker.Mock()
        cache.get.side_effect = CacheError(ErrorCode.CACHE_READ_FAILED, "unreadable")
        client = SlideShareClient("k", "s", transport=transport, cache=cache)
        transport.queue(SLIDESHOW_XML)

        assert client.get_slideshow(42).id == 42
        assert len(transport.calls) == 1

    def test_cached_payload_round_trips(self, client, transport):
        transport.queue(SLIDESHOW_XML)
        fresh = client.get_slideshow(42)

        cached = client.get_slideshow(42)

        assert cached.related_slideshow_ids == ["43", "44"]
        assert cached.download is True
        assert cached == fresh


def test_context_manager_closes_transport(mocker):
    transport = mocker.Mock()

    with SlideShareClient("k", "s", transport=transport, cache=NullCache()):
        pass

    transport.close.assert_called_once()
