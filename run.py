# =============================================================================
# run.py - Start the gateway under uvicorn and wait until it answers
# =============================================================================
# Usage: python run.py [--host 127.0.0.1] [--port 8000]
# Reads .env for Cloudflare credentials (see .env.example).
# =============================================================================

import argparse
import os
import subprocess
import sys
import time
import urllib.request

ROOT = os.path.dirname(os.path.abspath(__file__))


def wait_for_gateway(url: str, api_key: str | None, timeout: float = 30.0) -> bool:
    print(f"Waiting for gateway at {url}...", end="", flush=True)
    req = urllib.request.Request(f"{url}/v1/models")
    if api_key:
        req.add_header("Authorization", f"Bearer {api_key}")
    start = time.monotonic()
    while time.monotonic() - start < timeout:
        try:
            with urllib.request.urlopen(req, timeout=2) as response:
                if response.status == 200:
                    print(" Ready!")
                    return True
        except Exception:
            print(".", end="", flush=True)
            time.sleep(1)
    print(" Timeout.")
    return False


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the Workers AI image gateway")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    url = f"http://{args.host}:{args.port}"
    cmd = [
        sys.executable,
        "-m", "uvicorn",
        "imagegate.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    print(f"Starting gateway on {url}...")
    proc = subprocess.Popen(cmd, cwd=ROOT)

    keys = [k.strip() for k in os.environ.get("API_KEYS", "").split(",") if k.strip()]
    if not wait_for_gateway(url, keys[0] if keys else None):
        print("Gateway failed to start within timeout.")
        proc.terminate()
        return 1

    try:
        proc.wait()
    except KeyboardInterrupt:
        print("\nShutting down...")
    finally:
        if proc.poll() is None:
            proc.terminate()
            proc.wait(timeout=5)
    return proc.returncode or 0


if __name__ == "__main__":
    sys.exit(main())
