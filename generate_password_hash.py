#!/usr/bin/env python3
"""
Password Hash Generator
Generates the bcrypt hash for the admin login password.
Run this script to create the ADMIN_PASSWORD_HASH for your .env file.
Without a hash, the login password is the ADMIN_TOKEN itself.
"""
import getpass
import sys

from nallore_api.utils.auth import hash_password, verify_password


def main():
    """Main function to generate password hash."""
    print("=" * 60)
    print("Admin Password Hash Generator")
    print("=" * 60)
    print()
    print("This will generate a bcrypt hash for your admin password.")
    print("Copy the output to your .env file as ADMIN_PASSWORD_HASH")
    print()

    # Get password securely (won't echo to screen)
    password = getpass.getpass("Enter admin password: ")

    if not password:
        print("\nError: Password cannot be empty")
        return 1

    # Confirm password
    password_confirm = getpass.getpass("Confirm password: ")

    if password != password_confirm:
        print("\nError: Passwords do not match")
        return 1

    print("\nGenerating hash (this may take a moment)...")

    hashed = hash_password(password)
    if not verify_password(password, hashed):
        print("\nError: Generated hash does not verify")
        return 1

    print("\nSuccess! Copy this line to your .env file:\n")
    print(f"ADMIN_PASSWORD_HASH={hashed}")
    print()
    print("Keep this hash secret and never commit it to version control!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
