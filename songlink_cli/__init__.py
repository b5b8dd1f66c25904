"""
songlink-cli: Share music links across streaming platforms.

Copies the song.link page for a streaming URL on the clipboard back to the
clipboard, and can search Apple Music and download the chosen track.

Modules:
    core/        - Configuration, logging, exceptions, spinner, onboarding
    songlink/    - song.link API client and output formatting
    applemusic/  - Apple Music developer token, catalog search, selection
    download/    - MP3 / MP4 download through yt-dlp and ffmpeg
    utils/       - Clipboard access and file name helpers
    cli.py       - Command-line interface

Usage:
    Command Line:
        songlink                 # song.link URL of the clipboard link
        songlink -x              # song.link URL and Spotify URL
        songlink -d              # Discord-friendly (page URL in <>)
        songlink -s              # Spotify URL only
        songlink search caravan  # Search Apple Music
        songlink config          # Set up Apple Music credentials

    Python API:
        from songlink_cli.songlink import OutputMode, get_links

        get_links("https://music.apple.com/...", OutputMode.BOTH)
"""

__version__ = "1.0.0"
