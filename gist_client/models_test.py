"""Unit tests for models module."""

from .models import ApiResponse


def describe_ApiResponse():

    def describe_records():

        def it_returns_list_bodies_as_is():
            body = [{"id": "1"}, {"id": "2"}]
            assert ApiResponse(status=200, body=body).records == body

        def it_wraps_a_single_object():
            body = {"id": "1", "files": {}}
            assert ApiResponse(status=200, body=body).records == [body]

        def it_returns_nothing_for_an_empty_body():
            assert ApiResponse(status=204, body={}).records == []
            assert ApiResponse(status=200, body=[]).records == []

    def it_defaults_etag_and_link():
        r = ApiResponse(status=200, body=[])
        assert r.etag is None
        assert r.link is None
