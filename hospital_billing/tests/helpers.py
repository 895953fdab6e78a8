from datetime import datetime, timezone
from decimal import Decimal

from hospital_billing import CalculationInput, Service

NOW = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)


def service(billing_type, price="100", name="Service", parameters=None, sid="svc-1"):
    return Service(id=sid, name=name, price=Decimal(price), billing_type=billing_type, billing_parameters=parameters)


def usage(svc, **kwargs):
    return CalculationInput(service=svc, **kwargs)


def breakdown_sum(result):
    return sum((line.subtotal for line in result.breakdown), Decimal("0"))
