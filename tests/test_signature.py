from issuebot.slack.signature import verify_slack_request
from tests.conftest import SIGNING_SECRET, sign

BODY = '{"type":"event_callback","event":{"type":"message"}}'


class TestVerifySlackRequest:

    def timestamp(self, clock, offset: int = 0) -> str:
        return str(int(clock.now()) + offset)

    def test_valid_signature_and_fresh_timestamp(self, clock):
        ts = self.timestamp(clock)

        assert verify_slack_request(SIGNING_SECRET, ts, BODY, sign(BODY, ts), clock=clock) is True

    def test_accepts_bytes_body(self, clock):
        ts = self.timestamp(clock)

        assert verify_slack_request(
            SIGNING_SECRET, ts, BODY.encode("utf-8"), sign(BODY, ts), clock=clock
        ) is True

    def test_tampered_body_is_rejected(self, clock):
        ts = self.timestamp(clock)
        signature = sign(BODY, ts)

        assert verify_slack_request(
            SIGNING_SECRET, ts, BODY.replace("message", "massage"), signature, clock=clock
        ) is False

    def test_wrong_secret_is_rejected(self, clock):
        ts = self.timestamp(clock)

        assert verify_slack_request(
            SIGNING_SECRET, ts, BODY, sign(BODY, ts, "other-secret"), clock=clock
        ) is False

    def test_timestamp_exactly_300_seconds_old_is_accepted(self, clock):
        ts = self.timestamp(clock, -300)

        assert verify_slack_request(SIGNING_SECRET, ts, BODY, sign(BODY, ts), clock=clock) is True

    def test_timestamp_301_seconds_old_is_rejected(self, clock):
        ts = self.timestamp(clock, -301)

        assert verify_slack_request(SIGNING_SECRET, ts, BODY, sign(BODY, ts), clock=clock) is False

    def test_timestamp_301_seconds_in_future_is_rejected(self, clock):
        ts = self.timestamp(clock, 301)

        assert verify_slack_request(SIGNING_SECRET, ts, BODY, sign(BODY, ts), clock=clock) is False

    def test_length_mismatch_returns_false(self, clock):
        ts = self.timestamp(clock)

        assert verify_slack_request(SIGNING_SECRET, ts, BODY, "v0=short", clock=clock) is False

    def test_non_ascii_signature_returns_false(self, clock):
        ts = self.timestamp(clock)

        assert verify_slack_request(SIGNING_SECRET, ts, BODY, "v0=ñ" * 10, clock=clock) is False

    def test_missing_headers_return_false(self, clock):
        ts = self.timestamp(clock)

        assert verify_slack_request(SIGNING_SECRET, None, BODY, sign(BODY, ts), clock=clock) is False
        assert verify_slack_request(SIGNING_SECRET, ts, BODY, None, clock=clock) is False

    def test_non_numeric_timestamp_returns_false(self, clock):
        assert verify_slack_request(
            SIGNING_SECRET, "yesterday", BODY, sign(BODY, "yesterday"), clock=clock
        ) is False

    def test_uses_wall_clock_by_default(self):
        import time
        ts = str(int(time.time()))

        assert verify_slack_request(SIGNING_SECRET, ts, BODY, sign(BODY, ts)) is True
