"""
Example 03: Traits

This example demonstrates optional groups of mappings and methods that are
only composed when a mapper instance is created with their trait name.
"""

from form_map import OpenMapper, mapper
from dataclasses import dataclass


@dataclass
class Profile:
    """User profile entity"""
    login: str
    bio: str = ""
    admin: bool = False


def main():
    profile = Profile("carol", "Likes tea", False)

    builder = mapper("ProfileMapper").map("login")

    @builder.trait("with_bio")
    def with_bio(t):
        t.map("bio")
        t.method("short_bio", lambda self: self.target.bio[:10])

    @builder.trait("admin", requires="with_bio")
    def admin(t):
        t.map("admin", writer=lambda target, value: setattr(target, "admin", value == "1"))

    plan = builder.build()

    print("=== Without traits ===\n")
    print(f"  {OpenMapper(plan, profile).read()}")

    print("\n=== With 'with_bio' ===\n")
    m = OpenMapper(plan, profile, "with_bio")
    print(f"  {m.read()}")
    print(f"  short_bio(): {m.short_bio()}")

    print("\n=== With 'admin' (pulls in 'with_bio') ===\n")
    m = OpenMapper(plan, profile, "admin")
    m.write({"admin": "1"})
    print(f"  {m.read()}")

    print("\n=== Inline extension ===\n")
    m = OpenMapper(
        plan,
        profile,
        extension=lambda e: e.map("login_upper", "login", format="upper", writer=False),
    )
    print(f"  {m.read()}")


if __name__ == "__main__":
    main()
