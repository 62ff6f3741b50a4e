import pytest
from datetime import date, datetime, timezone

from ytsearch_kit import (SearchClient, build_criteria, MissingArgument, InvalidRange,
                          InvalidEnum, InvalidDate, InvalidCombination, ValidationError)


def test_missing_term():
    with pytest.raises(MissingArgument):
        build_criteria(None)
    with pytest.raises(MissingArgument):
        build_criteria("   ")


def test_negative_max_results():
    with pytest.raises(InvalidRange) as exc:
        build_criteria("cats", max_results=-1)
    assert "max_results=-1" in str(exc.value)


def test_no_upper_bound_on_max_results():
    criteria = build_criteria("cats", max_results=1000)
    assert criteria.max_results == 1000
    assert criteria.page_count == 20


@pytest.mark.parametrize("kwargs, param", [
    ({"video_license": "gpl"}, "video_license='gpl'"),
    ({"video_syndicated": "false"}, "video_syndicated='false'"),
    ({"video_type": "series"}, "video_type='series'"),
    ({"video_caption": "open"}, "video_caption='open'"),
    ({"type": "movie"}, "type='movie'"),
    ({"order": "random"}, "order='random'"),
])
def test_rejects_bad_enum(kwargs, param):
    with pytest.raises(InvalidEnum) as exc:
        build_criteria("cats", **kwargs)
    assert param in str(exc.value)


def test_validation_errors_are_value_errors():
    assert issubclass(InvalidEnum, ValidationError)
    with pytest.raises(ValueError):
        build_criteria("cats", video_license="gpl")


@pytest.mark.parametrize("bound", ["not-a-date", "2020-01-01", "2020-13-01T00:00:00Z",
                                   "2020-01-01 00:00:00Z"])
def test_rejects_bad_dates(bound):
    with pytest.raises(InvalidDate):
        build_criteria("cats", published_after=bound)
    with pytest.raises(InvalidDate):
        build_criteria("cats", published_before=bound)


def test_accepts_rfc3339_and_date_objects():
    criteria = build_criteria(
        "cats",
        published_after="1970-01-01T00:00:00Z",
        published_before=datetime(2020, 5, 1, 12, 30),
    )
    assert criteria.published_after == "1970-01-01T00:00:00Z"
    assert criteria.published_before == "2020-05-01T12:30:00Z"

    criteria = build_criteria("cats", published_after=date(2021, 2, 3),
                              published_before=datetime(2021, 3, 1, tzinfo=timezone.utc))
    assert criteria.published_after == "2021-02-03T00:00:00Z"
    assert criteria.published_before == "2021-03-01T00:00:00+00:00"


@pytest.mark.parametrize("bound", ["2020-01-01T00:00:00.5Z", "2020-01-01T00:00:00.123+02:00",
                                   "2020-01-01T00:00:00.123456Z"])
def test_accepts_fractional_seconds(bound):
    assert build_criteria("cats", published_after=bound).published_after == bound


@pytest.mark.parametrize("kind", ["channel", "playlist"])
def test_video_filter_with_non_video_type(kind):
    with pytest.raises(InvalidCombination) as exc:
        build_criteria("cats", type=kind, video_definition="high")
    assert "video_definition" in str(exc.value)


def test_non_video_type_drops_video_filters():
    criteria = build_criteria("cats", type="channel")
    assert criteria.video is None
    params = criteria.to_params()
    assert params["type"] == "channel"
    assert not any(k.startswith("video") for k in params)


def test_video_filters_sent_for_video_type():
    params = build_criteria("cats", video_license="creativeCommon", video_caption="closedCaption").to_params()
    assert params["videoLicense"] == "creativeCommon"
    assert params["videoCaption"] == "closedCaption"
    assert "videoType" not in params


def test_stats_need_video_type():
    with pytest.raises(InvalidCombination):
        build_criteria("cats", type="playlist", get_stats=True)


def test_location_needs_radius():
    with pytest.raises(InvalidCombination):
        build_criteria("cats", location="37.42307,-122.08427")
    params = build_criteria("cats", location="37.42307,-122.08427", location_radius="5km").to_params()
    assert params["locationRadius"] == "5km"


def test_term_spaces_are_encoded():
    assert build_criteria("Barack Obama").term == "Barack%20Obama"
    assert build_criteria("a b c").to_params()["q"] == "a%20b%20c"


def test_term_percent_is_escaped():
    assert build_criteria("100% cotton").term == "100%25%20cotton"
    assert build_criteria("a%2Fb").term == "a%252Fb"


def test_term_trailing_spaces_dropped():
    assert build_criteria("cats ").term == "cats"
    assert build_criteria("big  cats  ").term == "big%20%20cats"


def test_search_validates_before_any_request(mocker):
    session = mocker.Mock()
    yt = SearchClient(session=session)

    with pytest.raises(InvalidRange):
        yt.search("cats", max_results=-1)
    with pytest.raises(InvalidDate):
        yt.search("cats", published_after="not-a-date")
    with pytest.raises(InvalidCombination):
        yt.search("cats", type="channel", video_type="movie")
    with pytest.raises(MissingArgument):
        yt.search(None)
    with pytest.raises(InvalidEnum):
        yt.search("cats", video_license="gpl")

    session.ensure_valid.assert_not_called()
    session.request.assert_not_called()


def test_search_rejects_wrong_types():
    yt = SearchClient(session=None)
    with pytest.raises(TypeError) as exc:
        yt.search("cats", max_results="10")
    assert "max_results" in str(exc.value)
