"""
Stock — Celery Tasks

Periodic low-stock report. Read-only: it logs and returns counts,
it never changes stock.

@file stock/tasks.py
"""

import logging

from celery import shared_task
from django.conf import settings

logger = logging.getLogger('stockroom')


@shared_task(name='stock.report_low_stock')
def report_low_stock_task(threshold=None):
    """
    Count active products at or below the threshold, and how many of
    those are out of stock. Registered with Celery Beat to run daily.
    """
    from products.services import ProductService

    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD

    low = ProductService.get_low_stock(threshold=threshold)
    low_count = low.count()
    out_of_stock_count = low.filter(quantity=0).count()

    if low_count:
        logger.warning(
            'Low-stock report: %d products at or below %d units (%d out of stock).',
            low_count, threshold, out_of_stock_count,
        )
    else:
        logger.info('Low-stock report: no products at or below %d units.', threshold)
    return {
        'threshold': threshold,
        'low_stock_count': low_count,
        'out_of_stock_count': out_of_stock_count,
    }
