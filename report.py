from collections import namedtuple

MAX_NUMBERS = 7
LABEL_WIDTH = 40

ReportRow = namedtuple("ReportRow", ["label", "count", "numbers"])


def summarize(groups):
    return [ReportRow(grp.representative.label, grp.count, list(grp.numbers)) for grp in groups]


'''
only the last max_numbers descriptors are listed, older ones collapse into "..."
'''
def format_row(row, max_numbers=MAX_NUMBERS, width=LABEL_WIDTH):
    numbers = ", ".join(str(n) for n in row.numbers[-max_numbers:])
    if len(row.numbers) > max_numbers:
        numbers = "..., " + numbers
    return f"{row.label.ljust(width)} [{row.count:3d}] {numbers}"


def render(groups, max_numbers=MAX_NUMBERS, width=LABEL_WIDTH):
    return [format_row(row, max_numbers, width) for row in summarize(groups)]
