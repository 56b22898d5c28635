"""Tests for the insights panel metrics bundle."""

from datetime import timedelta

from reviewdash.services.insight_metrics import compute_business_metrics

HOUR = timedelta(hours=1)
DAY = timedelta(days=1)


def test_empty_snapshot_is_all_zero(now, make_snapshot):
    metrics = compute_business_metrics(make_snapshot([]), now)

    assert metrics.total_reviews == 0
    assert metrics.avg_rating == 0
    assert metrics.response_rate == 0
    assert metrics.sentiment_breakdown.model_dump() == {"positive": 0, "neutral": 0, "negative": 0}
    assert metrics.top_categories == []
    assert metrics.platform_performance == []
    assert metrics.response_time.median_hours == 0
    assert metrics.response_time.same_day_percentage == 0
    assert metrics.recent_trends.review_velocity == "stable"
    assert metrics.recent_trends.sentiment_trend == "stable"


def test_core_numbers(now, make_review, make_snapshot):
    posted = now - 2 * DAY
    reviews = [
        make_review(rating=5, sentiment="positive", categories=["service"],
                    reviewed_at=posted, has_response=True, responded_at=posted + 2 * HOUR),
        make_review(rating=4, sentiment="positive", categories=["service", "price"],
                    reviewed_at=posted, has_response=True, responded_at=posted + 30 * HOUR),
        make_review(rating=1, sentiment="negative", platform_id="p-yelp"),
    ]

    metrics = compute_business_metrics(make_snapshot(reviews), now)

    assert metrics.total_reviews == 3
    assert metrics.avg_rating == 3.33
    assert metrics.response_rate == 0.6667
    assert metrics.sentiment_breakdown.positive == 2
    assert metrics.sentiment_breakdown.negative == 1
    assert [(c.category, c.count) for c in metrics.top_categories] == [("service", 2), ("price", 1)]
    assert metrics.response_time.median_hours == 16
    assert metrics.response_time.same_day_percentage == 50.0


def test_platform_ratings_first_seen_order_with_unknown(now, make_review, make_snapshot):
    reviews = [
        make_review(platform_id="p-yelp", rating=2),
        make_review(platform_id="p-google", rating=5),
        make_review(platform_id="p-google", rating=4),
        make_review(platform_id="vanished", rating=3),
    ]

    rows = compute_business_metrics(make_snapshot(reviews), now).platform_performance

    assert [(r.platform, r.review_count, r.avg_rating) for r in rows] == [
        ("Yelp", 1, 2.0),
        ("Google", 2, 4.5),
        ("Unknown", 1, 3.0),
    ]


def test_same_day_percentage_keeps_one_decimal(now, make_review, make_snapshot):
    posted = now - 5 * DAY
    reviews = [
        make_review(reviewed_at=posted, has_response=True, responded_at=posted + timedelta(hours=h))
        for h in (1, 30, 40)
    ]

    metrics = compute_business_metrics(make_snapshot(reviews), now)

    assert metrics.response_time.same_day_percentage == 33.3


class TestRecentTrends:

    def test_only_recent_reviews_is_increasing(self, now, make_review, make_snapshot):
        reviews = [make_review(reviewed_at=now - 2 * DAY)]

        trends = compute_business_metrics(make_snapshot(reviews), now).recent_trends

        assert trends.review_velocity == "increasing"
        assert trends.sentiment_trend == "stable"

    def test_fewer_recent_than_older_is_decreasing(self, now, make_review, make_snapshot):
        reviews = [
            make_review(reviewed_at=now - 2 * DAY),
            make_review(reviewed_at=now - 40 * DAY),
            make_review(reviewed_at=now - 50 * DAY),
        ]

        trends = compute_business_metrics(make_snapshot(reviews), now).recent_trends

        assert trends.review_velocity == "decreasing"

    def test_equal_volume_is_stable(self, now, make_review, make_snapshot):
        reviews = [make_review(reviewed_at=now - 2 * DAY), make_review(reviewed_at=now - 40 * DAY)]

        assert compute_business_metrics(make_snapshot(reviews), now).recent_trends.review_velocity == "stable"

    def test_sentiment_improving_and_declining(self, now, make_review, make_snapshot):
        improving = [
            make_review(reviewed_at=now - 2 * DAY, sentiment_score=0.8),
            make_review(reviewed_at=now - 40 * DAY, sentiment_score=0.2),
        ]
        declining = [
            make_review(reviewed_at=now - 2 * DAY, sentiment_score=None),
            make_review(reviewed_at=now - 40 * DAY, sentiment_score=0.5),
        ]

        assert compute_business_metrics(make_snapshot(improving), now).recent_trends.sentiment_trend == "improving"
        assert compute_business_metrics(make_snapshot(declining), now).recent_trends.sentiment_trend == "declining"

    def test_small_sentiment_shift_is_stable(self, now, make_review, make_snapshot):
        reviews = [
            make_review(reviewed_at=now - 2 * DAY, sentiment_score=0.55),
            make_review(reviewed_at=now - 40 * DAY, sentiment_score=0.5),
        ]

        assert compute_business_metrics(make_snapshot(reviews), now).recent_trends.sentiment_trend == "stable"


def test_serialises_camel_case(now, make_snapshot):
    payload = compute_business_metrics(make_snapshot([]), now).model_dump(by_alias=True)

    assert set(payload) == {
        "totalReviews", "avgRating", "responseRate", "sentimentBreakdown",
        "topCategories", "platformPerformance", "responseTime", "recentTrends",
    }
    assert payload["responseTime"] == {"medianHours": 0, "sameDayPercentage": 0.0}
    assert payload["recentTrends"] == {"reviewVelocity": "stable", "sentimentTrend": "stable"}
