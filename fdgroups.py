import os
from dataclasses import dataclass
from typing import List

from fdtarget import TargetIdentity, equivalent

'''
Leading records left out of grouping. The first entry of an fd listing is
taken as an artifact of reading the listing, not a descriptor of the
inspected process. Providers without that artifact should pass skip_count=0.
'''
SKIP_COUNT = 1


@dataclass(frozen=True)
class DescriptorRecord:
    number: int
    target: TargetIdentity

    def __post_init__(self):
        if self.number < 0:
            raise ValueError(f"descriptor number must be >= 0, got {self.number}")


@dataclass
class DescriptorGroup:
    representative: TargetIdentity
    numbers: List[int]

    def __post_init__(self):
        if not self.numbers:
            raise ValueError("a descriptor group needs at least one number")

    @property
    def count(self):
        return len(self.numbers)


def group_descriptors(records, skip_count=SKIP_COUNT, same_file=os.path.samefile):
    '''
    Groups descriptors by the target they point at.

    Groups come out in first-seen order and each group keeps the order its
    numbers were seen in. A record joins the first existing group whose
    representative is equivalent to its target; later groups are not
    checked, so groups are never merged with each other.
    '''
    groups = []
    for record in list(records)[skip_count:]:
        for grp in groups:
            if equivalent(record.target, grp.representative, same_file=same_file):
                grp.numbers.append(record.number)
                break
        else:
            groups.append(DescriptorGroup(record.target, [record.number]))
    return groups
