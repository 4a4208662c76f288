"""
ecies_ffi — Live Demo
=====================
Run:  python examples/demo_ecies.py

Walks the four boundary calls the mobile app makes, then shows that a
different key and a tampered envelope both fail the same way.
"""

import sys, os, time, logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ecies_ffi              import codec
from ecies_ffi.boundary     import Boundary
from ecies_ffi.bridge       import EciesBridge
from ecies_ffi.config       import EciesConfig
from ecies_ffi.errors       import BoundaryError

LINE = "═" * 70
MSG  = "hello from the mobile app"

def header(name):
    print(f"\n{LINE}")
    print(f"  {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

logging.basicConfig(level=logging.INFO, format=' %(message)s')

# ─────────────────────────────────────────────────────────────────────────────
header("Boundary calls (AES-256-GCM, compressed ephemeral key)")
adapter = Boundary()

t0 = time.perf_counter()
with adapter.generate_secret_key() as buf:
    secret = buf.read_text()
    ok("Secret key buffer", f"{buf.size} chars @ 0x{buf.address:x}")
with adapter.public_key_from(secret) as buf:
    public = buf.read_text()
    ok("Public key", public)
with adapter.encrypt(public, MSG) as buf:
    ciphertext = buf.read_text()
    ok("Envelope", f"{len(codec.decode_ciphertext(ciphertext))} bytes, base64 {buf.size} chars")
with adapter.decrypt(secret, ciphertext) as buf:
    ok("Decrypted", buf.read().decode())
elapsed = time.perf_counter() - t0
ok("Round-trip", f"{elapsed*1000:.2f} ms")
ok("Live buffers after release", str(adapter.registry.live_count))

# ─────────────────────────────────────────────────────────────────────────────
header("Rejection")
other = adapter.generate_secret_key_text()
envelope = bytearray(codec.decode_ciphertext(ciphertext))
envelope[-1] ^= 0xFF
tampered = codec.encode_ciphertext(bytes(envelope))
for label, key, ct in (("Wrong key", other, ciphertext), ("Tampered", secret, tampered)):
    try:
        adapter.decrypt(key, ct)
        print(f"  ✗  {label}: decrypted!")
    except BoundaryError as e:
        ok(label, f"rejected ({e})")

# ─────────────────────────────────────────────────────────────────────────────
header("Host bridge (ChaCha20-Poly1305)")
bridge = EciesBridge(Boundary(config=EciesConfig(EciesConfig.CHACHA20_POLY1305)))
secret = bridge.generate_secret_key()
ct     = bridge.encrypt_message(bridge.derive_public_key_from(secret), MSG)
ok("Ciphertext", ct[:40] + "...")
ok("Decrypted", bridge.decrypt_message(secret, ct))
print(LINE + "\n")
