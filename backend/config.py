import os


def _flag(name, default='0'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///blindtest.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Register every chat participant at 0 points, even before a correct guess
    ADD_EVERY_USER = _flag('ADD_EVERY_USER')
    # Announce correct guesses back to the chat channel
    CHAT_NOTIFICATIONS = _flag('CHAT_NOTIFICATIONS')
    # Playback device and chat channel, handed to the collaborators untouched
    DEVICE_ID = os.environ.get('DEVICE_ID')
    TWITCH_CHANNEL = os.environ.get('TWITCH_CHANNEL')
    # Leaderboard rows rendered before the "+K more" line
    DISPLAYED_USER_LIMIT = int(os.environ.get('DISPLAYED_USER_LIMIT', '70'))
    # Optional: debounce host actions (next/reveal) (ms). 0 disables.
    CONTROLLER_DEBOUNCE_MS = int(os.environ.get('CONTROLLER_DEBOUNCE_MS', '0'))
