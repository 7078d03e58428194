"""
Example 01: Basic Mapping

This example demonstrates reading a flat params dict from a target object,
and writing one back, using FormMap's basic mappings.
"""

from form_map import OpenMapper, mapper
from dataclasses import dataclass
import datetime


@dataclass
class Customer:
    """Customer entity"""
    first_name: str
    last_name: str
    born: datetime.date | None = None

    def full_name(self):
        return f"{self.first_name} {self.last_name}"


def main():
    customer = Customer("Alice", "Smith", datetime.date(1990, 5, 17))

    # Build mapping plan
    plan = (
        mapper("CustomerMapper")
        .map("first", "first_name")
        .map("last", "last_name")
        .map("name", reader="full_name", writer=False)
        .map("dob", "born", format="iso8601", multiparam=datetime.date)
        .build()
    )

    m = OpenMapper(plan, customer)

    print("=== Reading ===\n")
    for key, value in m.read().items():
        print(f"  {key}: {value!r}")

    print("\n=== Writing ===\n")
    m.write({
        "first": "Alicia",
        "dob(1i)": "1991",
        "dob(2i)": "06",
        "dob(3i)": "01",
        "unknown": "ignored",
    })
    print(f"  {customer}")
    print(f"  name: {m.read()['name']}")


if __name__ == "__main__":
    main()
