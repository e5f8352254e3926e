# entrypoint.py
import asyncio
import os
import threading

MODE = os.getenv("BOT_MODE", "prod").lower()

# ─────────────────────────────────────────────────────────────
# DEV: Socket Mode (local)
# ─────────────────────────────────────────────────────────────
if MODE == "dev":
    from slack_bolt import App
    from slack_bolt.adapter.socket_mode import SocketModeHandler

    # same pipeline as the PROD route
    from slack_handler import process_slack_command
    from trumpify.config import COMMAND_NAME

    app = App(token=os.environ["SLACK_BOT_TOKEN"])

    # one long-lived loop: cached async clients stay bound to it and paired
    # replies keep running after the bolt handler returns
    _loop = asyncio.new_event_loop()
    threading.Thread(target=_loop.run_forever, name="trumpify-loop", daemon=True).start()

    @app.command(COMMAND_NAME)
    def handle_trumpify(ack, command, respond):
        # Slack wants the ack within 3 seconds, before the rewrite
        ack()

        reply = asyncio.run_coroutine_threadsafe(process_slack_command(command), _loop).result()

        if reply.body and reply.body.get("text"):
            respond(
                text=reply.body["text"],
                response_type=reply.body.get("response_type", "ephemeral"),
            )

    SocketModeHandler(
        app,
        os.environ["SLACK_APP_TOKEN"]
    ).start()


# ─────────────────────────────────────────────────────────────
# PROD: FastAPI (slash command webhook / Cloud Run)
# ─────────────────────────────────────────────────────────────
else:
    from main import app  # FastAPI app (prod)
