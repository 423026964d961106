"""
Clear every stored game snapshot from the database.
Use this to reset all sessions' boards, scores and favorites to the initial state.
"""
from app import create_app
from services.state_store import SnapshotStore
from models import db


def clear_all_data(app=None):
    """Delete all snapshots; sessions fall back to the initial state on next load."""
    app = app or create_app()
    with app.app_context():
        try:
            num_snapshots = SnapshotStore().clear()
            print("✅ Successfully cleared database:")
            print(f"   - Deleted {num_snapshots} snapshot(s)")
            return num_snapshots
        except Exception as e:
            db.session.rollback()
            print(f"❌ Error clearing database: {e}")
            return 0


if __name__ == "__main__":
    response = input("⚠️  This will delete ALL saved game snapshots. Are you sure? (yes/no): ")
    if response.lower() == 'yes':
        clear_all_data()
    else:
        print("❌ Operation cancelled.")
