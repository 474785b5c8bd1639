"""Company-size buckets on employee count, shared by searching and faceting."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SizeBucket:
    name: str
    min_employees: int | None
    max_employees: int | None

    def contains(self, employee_count: int) -> bool:
        if self.min_employees is not None and employee_count < self.min_employees:
            return False
        if self.max_employees is not None and employee_count > self.max_employees:
            return False
        return True


COMPANY_SIZE_BUCKETS: tuple[SizeBucket, ...] = (
    SizeBucket("startup", None, 10),
    SizeBucket("small", 11, 50),
    SizeBucket("medium", 51, 200),
    SizeBucket("large", 201, 1000),
    SizeBucket("enterprise", 1001, None),
)

_BUCKETS_BY_NAME = {bucket.name: bucket for bucket in COMPANY_SIZE_BUCKETS}


def get_size_bucket(name: str) -> SizeBucket | None:
    """Return the bucket for a canonical size tag, or None for unknown tags."""
    return _BUCKETS_BY_NAME.get(name)


def bucket_for_employee_count(employee_count: int) -> SizeBucket:
    for bucket in COMPANY_SIZE_BUCKETS:
        if bucket.contains(employee_count):
            return bucket
    # Buckets are contiguous and open at both ends
    return COMPANY_SIZE_BUCKETS[0]
