"""
Persistence - one Session per request, saved to a SQLite store
"""
import logging

from flashsession import Session, SQLiteSessionStore, setup_logging

TTL = 60 * 60


def handle_request(store, session_id, form=None):
    session = Session.load(store, session_id)
    if session.is_expired():
        session.reset(TTL)

    if form:
        session.set("name", form["name"])
        session.flash("notice", f"Saved {form['name']}")
    else:
        print("Notice:", session.get("notice"))
        print("Name:", session.get("name"))

    session.refresh(TTL)
    session.save(store, session_id)


def main():
    logging.basicConfig(level=logging.DEBUG)
    setup_logging(logging.DEBUG)

    with SQLiteSessionStore("example_sessions") as store:
        handle_request(store, "abc123", form={"name": "Ada"})
        handle_request(store, "abc123")  # shows the flash notice
        handle_request(store, "abc123")  # notice is gone

        # Inspect from the shell:
        #   flashsession show abc123 --db example_sessions.session
        store.delete_file()


if __name__ == "__main__":
    main()
