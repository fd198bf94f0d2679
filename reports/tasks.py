"""
Reports — Celery Tasks

Periodic low-stock scan.

@file reports/tasks.py
"""

import logging

from celery import shared_task

logger = logging.getLogger('sims')


@shared_task(name='reports.scan_low_stock')
def scan_low_stock_task():
    """
    Daily task: log a warning for every part below the low-stock
    threshold. Registered with Celery Beat.
    """
    from .services import ReportService

    report = ReportService.stock_status()
    for row in report['low_stock_items']:
        logger.warning(
            'Low stock: %s (%s) has %d units left.',
            row['spare_part'], row['category'], row['current_quantity'],
        )
    count = report['summary']['low_stock_items_count']
    logger.info('scan_low_stock_task completed: %d low-stock parts.', count)
    return {'low_stock_count': count}
