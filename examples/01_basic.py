"""
Basic usage - values, flash messages and expiration
"""
from flashsession import Session


def main():
    session = Session()
    session.reset(30 * 60)  # expire in 30 minutes

    # Persistent value: readable any number of times
    session.set("user_id", 42)
    print(session.get("user_id"))
    print(session.get("user_id"))

    # Flash value: gone after the first read
    session.flash("notice", "Profile saved")
    print(session.get("notice"))   # Profile saved
    print(session.get("notice"))   # None

    # Push the deadline out without losing data
    session.refresh(60 * 60)
    print(session.get_session_object().expire)
    print("Expired:", session.is_expired())


if __name__ == "__main__":
    main()
