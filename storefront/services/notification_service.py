# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_confirmation(user_id: str, order_id: str, order_number: str):
        """
        Potwierdzenie zlozenia zamowienia. Blad kolejki nie moze wywrocic checkoutu.
        """
        try:
            send_order_confirmation_task.delay(user_id, order_id, order_number)
        except Exception as e:
            logger.warning(f"Could not enqueue confirmation for order {order_number}: {e}")


@celery_app.task(name="storefront.services.notification_service.send_order_confirmation_task")
def send_order_confirmation_task(user_id: str, order_id: str, order_number: str):
    """
    Celery task - mail/SMS wysyla zewnetrzny dostawca, tu tylko logujemy.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_number} ({order_id}) placed, awaiting payment")

    return {"user_id": user_id, "order_id": order_id, "order_number": order_number, "status": "sent"}
