import csv
import io
from pathlib import Path

from fastapi.testclient import TestClient
import orjson
import pytest

from src.main import app
from src.platform.config.core_setting import Settings
from src.service.ticketing.driven_adapter.notification.booking_confirmation_notifier_impl import (
    BookingConfirmationNotifierImpl,
)


ANN = {'first_name': 'ann', 'last_name': 'lee', 'email': 'Ann@X.com', 'tickets': 3}
BO = {'first_name': 'bo', 'last_name': 'li', 'email': 'bo@x.com', 'tickets': 8}


class TestBookingApi:
    def test_health(self, client: TestClient) -> None:
        response = client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    def test_create_booking(
        self,
        client: TestClient,
        snapshot_path: Path,
        sent_confirmations: BookingConfirmationNotifierImpl,
    ) -> None:
        response = client.post('/api/booking', json=ANN)

        assert response.status_code == 201
        body = response.json()
        assert body['remaining_tickets'] == 7
        assert body['persisted'] is True
        assert body['booking']['id'] == 1
        assert body['booking']['first_name'] == 'Ann'
        assert body['booking']['email'] == 'ann@x.com'

        saved = orjson.loads(snapshot_path.read_bytes())
        assert saved['conference']['remaining_tickets'] == 7
        assert saved['next_id'] == 1
        assert [c.booking_id for c in sent_confirmations.sent] == [1]

    def test_capacity_error_is_409_and_changes_nothing(self, client: TestClient) -> None:
        client.post('/api/booking', json=ANN)

        response = client.post('/api/booking', json=BO)

        assert response.status_code == 409
        assert response.json() == {'detail': 'Only 7 tickets remaining'}
        assert client.get('/api/booking/stats').json()['remaining_tickets'] == 7

    @pytest.mark.parametrize(
        ('field', 'value', 'detail'),
        [
            ('email', 'bad-email', 'Invalid email address'),
            ('first_name', 'A', 'First name must have at least 2 characters'),
            ('tickets', 0, 'Tickets must be greater than 0'),
        ],
    )
    def test_invalid_input_is_400(
        self, client: TestClient, field: str, value: object, detail: str
    ) -> None:
        response = client.post('/api/booking', json={**ANN, field: value})

        assert response.status_code == 400
        assert response.json() == {'detail': detail}

    def test_malformed_body_is_400_with_readable_detail(self, client: TestClient) -> None:
        body = {key: value for key, value in ANN.items() if key != 'tickets'}

        response = client.post('/api/booking', json=body)

        assert response.status_code == 400
        assert response.json() == {'detail': 'tickets: Field required'}

    def test_list_and_filter_by_email(self, client: TestClient) -> None:
        client.post('/api/booking', json=ANN)
        client.post('/api/booking', json={**BO, 'tickets': 1})

        all_bookings = client.get('/api/booking').json()
        anns = client.get('/api/booking', params={'email': 'ANN@X.COM'}).json()

        assert [booking['id'] for booking in all_bookings] == [1, 2]
        assert [booking['id'] for booking in anns] == [1]

    def test_get_booking(self, client: TestClient) -> None:
        client.post('/api/booking', json=ANN)

        assert client.get('/api/booking/1').json()['last_name'] == 'Lee'

        missing = client.get('/api/booking/99')
        assert missing.status_code == 404
        assert missing.json() == {'detail': 'Booking #99 not found'}

    def test_cancel_booking(self, client: TestClient) -> None:
        client.post('/api/booking', json=ANN)

        response = client.delete('/api/booking/1')

        assert response.status_code == 200
        assert response.json() == {
            'booking_id': 1,
            'released_tickets': 3,
            'remaining_tickets': 10,
            'persisted': True,
        }
        assert client.get('/api/booking').json() == []
        assert client.delete('/api/booking/1').status_code == 404

    def test_ids_are_not_reused_after_cancel(self, client: TestClient) -> None:
        client.post('/api/booking', json=ANN)
        client.delete('/api/booking/1')

        response = client.post('/api/booking', json=ANN)

        assert response.json()['booking']['id'] == 2

    def test_stats(self, client: TestClient) -> None:
        client.post('/api/booking', json=ANN)

        assert client.get('/api/booking/stats').json() == {
            'conference_name': 'PyCon Test',
            'total_tickets': 10,
            'remaining_tickets': 7,
            'booked_tickets': 3,
            'booking_count': 1,
            'attendee_first_names': ['Ann'],
        }

    def test_export_downloads_csv(self, client: TestClient) -> None:
        client.post('/api/booking', json=ANN)

        response = client.get('/api/booking/export')

        assert response.status_code == 200
        assert response.headers['content-type'].startswith('text/csv')
        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0] == ['id', 'first_name', 'last_name', 'email', 'tickets', 'booked_at']
        assert rows[1][:5] == ['1', 'Ann', 'Lee', 'ann@x.com', '3']

    def test_export_uses_a_private_file_per_download(
        self, client: TestClient, test_settings: Settings
    ) -> None:
        client.post('/api/booking', json=ANN)

        first = client.get('/api/booking/export')
        client.post('/api/booking', json={**BO, 'tickets': 1})
        second = client.get('/api/booking/export')

        assert 'filename="bookings.csv"' in first.headers['content-disposition']
        assert len(first.text.splitlines()) == 2
        assert len(second.text.splitlines()) == 3
        assert not test_settings.EXPORT_CSV_PATH.exists()


class TestBookingApiRestart:
    def test_state_survives_restart(self, test_container: None) -> None:
        """
        Given a booking made in one app run
        When the app starts again on the same snapshot file
        Then the booking and the id counter are restored
        """
        with TestClient(app) as first_run:
            first_run.post('/api/booking', json=ANN)

        with TestClient(app) as second_run:
            assert [b['id'] for b in second_run.get('/api/booking').json()] == [1]
            assert second_run.post('/api/booking', json=ANN).json()['booking']['id'] == 2

    def test_corrupt_snapshot_aborts_startup(
        self, test_container: None, snapshot_path: Path
    ) -> None:
        snapshot_path.parent.mkdir(parents=True, exist_ok=True)
        snapshot_path.write_text('{broken')

        # Depending on the Starlette version the error may arrive wrapped in an ExceptionGroup
        with pytest.raises(Exception) as exc_info:
            with TestClient(app):
                pass

        assert 'not valid JSON' in repr(exc_info.value)
        assert snapshot_path.read_text() == '{broken'
