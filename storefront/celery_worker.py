# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAZNE: explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "storefront.tasks.cart_cleanup",
    "storefront.services.notification_service",
)

#w testach taski leca synchronicznie w tym samym procesie
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
celery_app.conf.task_eager_propagates = False

celery_app.conf.timezone = "UTC"
