"""
Script to create an Admin account
Run this to create the first admin user
"""

import sys
import asyncio
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.database import database, connect_db, disconnect_db
from app.auth import hash_password, generate_random_password
from app.services.user_service import qr_code_for


async def create_admin(email: str, name: str, college: str, password: str = None):
    """
    Create an admin user
    
    Args:
        email: Admin email
        name: Admin full name
        college: Admin college, shown on the admin profile
        password: Password (if None, will generate random)
    """
    
    await connect_db()
    
    try:
        # Check if user already exists
        existing = await database.fetch_one(
            "SELECT id FROM users WHERE email = :email",
            {"email": email}
        )
        
        if existing:
            print(f"❌ A user with email {email} already exists!")
            return
        
        # Generate password if not provided
        generated = password is None
        if generated:
            password = generate_random_password(12)
        
        await database.execute(
            """
            INSERT INTO users (name, college, email, password_hash, role, payment_status)
            VALUES (:name, :college, :email, :password_hash, 'admin', 'paid')
            """,
            {
                "name": name,
                "college": college,
                "email": email,
                "password_hash": hash_password(password)
            }
        )
        admin_id = await database.fetch_val(
            "SELECT id FROM users WHERE email = :email",
            {"email": email}
        )
        await database.execute(
            "UPDATE users SET qr_code_id = :qr_code_id WHERE id = :admin_id",
            {"qr_code_id": qr_code_for(admin_id), "admin_id": admin_id}
        )
        
        print("✅ Admin created successfully!")
        print(f"   Email: {email}")
        print(f"   Name: {name}")
        
        if generated:
            print(f"   Password: {password}")
            print("   ⚠️  IMPORTANT: Save this password!")
        else:
            print("   Password: (custom password set)")
    
    finally:
        await disconnect_db()


async def main():
    """Main function"""
    print("\n" + "="*60)
    print("CREATE ADMIN")
    print("="*60 + "\n")
    
    email = input("Enter email: ").strip()
    name = input("Enter full name: ").strip()
    college = input("Enter college: ").strip()
    
    use_custom = input("Set custom password? (y/n): ").strip().lower()
    
    if use_custom == 'y':
        password = input("Enter password: ").strip()
        confirm = input("Confirm password: ").strip()
        
        if password != confirm:
            print("❌ Passwords do not match!")
            return
        
        if len(password) < 8:
            print("❌ Password must be at least 8 characters!")
            return
    else:
        password = None
    
    print("\n")
    await create_admin(email, name, college, password)
    print("\n")


if __name__ == "__main__":
    asyncio.run(main())
