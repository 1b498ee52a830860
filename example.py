# example.py
# A small example demonstrating how to use the grephuman library to label
# a search results page, hide the AI-looking results and print a summary.

import asyncio
import logging

from grephuman import MessageBridge, PageSession, SearchPage

# --- Configuration ---
# You can enable logging to see the engine's progress and decisions.
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

PAGE_URL = "https://www.google.com/search?q=python+tips"

PAGE_HTML = """
<html><head><title>python tips</title></head><body>
<div id="search"><div id="rso">
  <div class="g">
    <a href="https://example.org/a"><h3>10 Python tips you need</h3></a>
    <div class="VwiC3b">In today's fast-paced digital landscape, let's dive into
    this game changer! 🚀🔥✅</div>
  </div>
  <div class="g">
    <a href="https://example.org/b"><h3>Python idioms, revisited</h3></a>
    <div class="VwiC3b">Mar 3, 2020 — notes from a long-running mailing list thread</div>
  </div>
</div></div>
</body></html>
"""

LATER_RESULT = """
<div class="g">
  <a href="https://example.org/c"><h3>Forum: generators vs lists</h3></a>
  <div class="VwiC3b">il y a 4 ans — discussion du forum</div>
</div>
"""


async def main():
    page = SearchPage.from_html(PAGE_HTML, url=PAGE_URL)
    session = PageSession(page)
    if not session.start():
        print("Not a search results page.")
        return

    # Results loaded later (e.g. by scrolling) get labeled once the page
    # has been quiet for the debounce window.
    page.insert_results(LATER_RESULT)
    await asyncio.sleep(session.watcher.debouncer.delay * 2)

    # The popup talks to the page through a bridge.
    bridge = MessageBridge(session.handle_message)
    print(f"Session alive: {bridge.ping()}")
    print(f"Hidden: {bridge.hide_ai_results()}")

    print("\n--- Labels ---")
    for outcome in session.engine.outcomes:
        print(f"{outcome.verdict:<9} {outcome.title}  ({outcome.tooltip or 'no details'})")

    session.stop()


if __name__ == "__main__":
    asyncio.run(main())
