from config import settings
from database import SessionLocal, engine, Base
from models.content import ClubInfo
from models.users import AppRole, User
from services.auth import create_account

# --- Tables bana do agar missing hain ---
Base.metadata.create_all(bind=engine)

DEFAULT_SECTIONS = [
    {
        "section": "vision",
        "title": "Our Vision",
        "description": "To build a campus community where every student can learn to code, "
                       "build real projects and grow into a confident engineer.",
    },
    {
        "section": "mission",
        "title": "Our Mission",
        "description": "• Run regular workshops and hackathons"
                       "• Share learning resources openly"
                       "• Mentor beginners through their first projects",
    },
    {
        "section": "objectives",
        "title": "Objectives",
        "description": "Learning: Weekly sessions on programming fundamentals\n\n"
                       "Building: Team projects that solve campus problems\n\n"
                       "Sharing: Talks and write-ups by members",
    },
    {
        "section": "rules",
        "title": "Club Rules",
        "description": "General Conduct\nBe respectful to every member\nKeep the lab clean\n\n"
                       "Attendance\nInform a coordinator before missing a session\n\n"
                       "Disciplinary Action\nFirst violation: warning\nRepeated violations: suspension",
    },
]


def seed_data(db):
    print("🌱 Seeding club portal data...")

    # 1. ADMIN ACCOUNT
    email = settings.admin_email.strip().lower()
    if not db.query(User).filter(User.email == email).first():
        create_account(db, email, settings.admin_password, settings.admin_name, role=AppRole.club_mentor)
        print(f"✅ Added admin: {email}")
    else:
        print(f"ℹ️  Exists: {email}")

    # 2. ABOUT PAGE SECTIONS
    for item in DEFAULT_SECTIONS:
        exists = db.query(ClubInfo).filter_by(section=item["section"]).first()
        if not exists:
            db.add(ClubInfo(**item))
            print(f"  └── Section '{item['section']}' added")
    db.commit()

    print("\n🎉 All Data Seeded Successfully!")


if __name__ == "__main__":
    session = SessionLocal()
    try:
        seed_data(session)
    finally:
        session.close()
