import asyncio
import json

import httpx

BASE_URL = "http://localhost:8787"
CLIENT_ID = "debug_client_v1"

TURNS = [
    "I push open the heavy oak door.",
    "I raise my lantern and look for footprints.",
    "I follow the tracks toward the sound of water.",
]


async def run_simulation():
    async with httpx.AsyncClient(base_url=BASE_URL, timeout=60.0) as client:
        print(f"🔹 Starting Simulation for Client: {CLIENT_ID}")

        history = []
        for i, turn in enumerate(TURNS, start=1):
            print(f"\n▶ Player Turn {i}: {turn}")
            resp = await client.post(
                "/api/continue",
                json={
                    "history": history,
                    "userTurn": turn,
                    "mood": "gothic horror",
                    "drama": 4,
                },
            )
            print(f"   Response: {resp.status_code}")
            data = resp.json()
            print(f"   [Narrator]: {data.get('text')}")
            if resp.status_code != 200:
                print(f"❌ Narration failed: {data.get('error')}")
                return

            history.append({"role": "user", "content": turn})
            history.append({"role": "assistant", "content": data["text"]})

        # Share the session to the storyboard
        print("\n📤 Sharing story...")
        resp = await client.post(
            "/api/storyboard/share",
            json={
                "title": "The Oak Door",
                "mood": "gothic horror",
                "drama": 4,
                "content": "\n\n".join(m["content"] for m in history),
                "author": CLIENT_ID,
            },
        )
        if resp.status_code != 200:
            print(f"❌ Failed to share: {resp.status_code} {resp.text}")
            return
        story = resp.json()["story"]
        print(f"   Story ID: {story.get('id')}")

        resp = await client.post(
            "/api/storyboard/react",
            json={"story_id": story["id"], "value": 1, "client_id": CLIENT_ID},
        )
        print(f"   Like: {resp.json()}")

        resp = await client.post(
            "/api/storyboard/comment",
            json={"story_id": story["id"], "handle": "tester", "body": "Spooky!"},
        )
        print(f"   Comment: {resp.json()}")

        print("\n📜 Recent stories...")
        resp = await client.get("/api/storyboard/list")
        print(json.dumps(resp.json(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    asyncio.run(run_simulation())
