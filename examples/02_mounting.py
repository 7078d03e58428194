"""
Example 02: Mounting

This example demonstrates composing several mappers into one flat form,
using suffixes to keep field names unique.
"""

from form_map import OpenMapper, mapper
from dataclasses import dataclass, field


@dataclass
class Address:
    """Address value object"""
    street: str = ""
    city: str = ""


@dataclass
class Customer:
    """Customer with two addresses"""
    name: str
    home: Address = field(default_factory=Address)
    work: Address = field(default_factory=Address)


def main():
    customer = Customer(
        "Bob",
        home=Address("1 Main St", "Springfield"),
        work=Address("9 Dock Rd", "Shelbyville"),
    )

    address = mapper("AddressMapper", Address).map_fields("street", "city").build()
    plan = (
        mapper("CustomerMapper")
        .map("name")
        .mount(address, name="home", suffix="home")
        .mount(address, name="work", suffix="work")
        .build()
    )

    m = OpenMapper(plan, customer)

    print("=== Flat form ===\n")
    for key, value in m.read().items():
        print(f"  {key}: {value}")

    m.write({"city_home": "Capital City", "street_work": "10 Dock Rd"})

    print("\n=== After write ===\n")
    print(f"  home: {customer.home}")
    print(f"  work: {customer.work}")
    same = m.mounting("work").target is customer.work
    print(f"  mounting('work').target is customer.work: {same}")


if __name__ == "__main__":
    main()
