# storefront/tasks/cart_cleanup.py
from sqlalchemy.exc import SQLAlchemyError

from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.repos.cart_repo import CartRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(
    name="storefront.tasks.cart_cleanup.clear_cart_task",
    autoretry_for=(SQLAlchemyError,),
    retry_backoff=True,
    retry_backoff_max=60,
    max_retries=5,
)
def clear_cart_task(user_id: str) -> int:
    """
    Dokonczenie checkoutu: zamowienie juz jest w bazie, zostal tylko pusty koszyk.
    Powtarzane az sie uda (albo skoncza sie proby) - zamowienia nie cofamy.
    """
    logger.info(f"Clear cart task started for user {user_id}")

    db = SessionLocal()
    try:
        repo = CartRepo(db)
        removed = repo.delete_all_by_user(user_id)
        repo.commit()
        logger.info(f"Removed {removed} cart items for user {user_id}")
        return removed
    except SQLAlchemyError:
        db.rollback()
        raise
    finally:
        db.close()
