import logging
import sys
from typing import NoReturn, Optional

import colorama

import jubsig
from jubsig.codec import PK_BYTES, SIG_BYTES, decode_hex, encode_hex, encode_pk, encode_sig, verify_bytes
from jubsig.eddsa import message_fe, sign
from jubsig.keys import SEED_BYTES, PrivateKey

T = "\x1B[1;44m"  # titlebar (white on blue)
C = "\x1B[0;34m"  # command (dark blue)
F = "\x1B[1;34m"  # flag (light blue)
D = "\x1B[1;30m"  # dark / syntax markup
N = "\x1B[0m"     # normal color

usage = f"""\
{C}jubsig {F}keygen{N}                             {D}—{N} create a new secret key
{C}jubsig {F}pubkey -i {N}seckey                   {D}—{N} show the public key
{C}jubsig {F}sign -i {N}seckey message             {D}—{N} sign a field element
{C}jubsig {F}verify -r {N}pubkey {F}-s {N}signature message {D}—{N} check a signature

Keys and signatures are hex. The message is an integer below the BLS12-381
group order, in decimal or with a 0x prefix. Add {F}--debug{N} to any command to
log the verification steps and to see full error tracebacks.
"""


class Args:

  def __init__(self):
    self.mode = None
    self.files = []
    self.identities = []
    self.recipients = []
    self.signatures = []
    self.debug = None


keygenargs = dict(debug='--debug'.split(),)
pubkeyargs = dict(
  identities='-i --identity'.split(),
  debug='--debug'.split(),
)
signargs = pubkeyargs
verifyargs = dict(
  recipients='-r --recipient'.split(),
  signatures='-s --signature'.split(),
  debug='--debug'.split(),
)


def subcommand(arg):
  if arg in ('keygen', 'genkey'): return 'keygen', keygenargs
  if arg in ('pubkey', 'pk'): return 'pubkey', pubkeyargs
  if arg in ('sign', ): return 'sign', signargs
  if arg in ('verify', ): return 'verify', verifyargs
  if arg in ('help', ): return 'help', {}
  return None, {}


def print_help(error: Optional[str] = None) -> NoReturn:
  if error:
    sys.stderr.write(f"{error}\n")
    sys.exit(1)
  first = f"Jubsig {jubsig.__version__} - EdDSA signatures on Jubjub with Poseidon2"
  if sys.stdout.isatty():
    print(f"{T}{first:78}{N}\n\n{usage}")
  else:
    # Strip the colors when piped
    text = usage
    for code in (C, F, D, N):
      text = text.replace(code, "")
    print(f"{first}\n\n{text}")
  sys.exit(0)


def argparse():
  # Custom parsing due to argparse module's limitations with free-form mode words
  av = sys.argv[1:]
  if not av or any(a.lower() in ('-h', '--help') for a in av):
    print_help()
  if any(a.lower() in ('-v', '--version') for a in av):
    print(f"Jubsig {jubsig.__version__}")
    sys.exit(0)

  args = Args()
  args.mode, ad = subcommand(av[0])
  if args.mode == 'help':
    print_help()
  if args.mode is None:
    print_help(' 💣  Invalid or missing command (keygen/pubkey/sign/verify/help).')

  aiter = iter(av[1:])
  for a in aiter:
    if not a.startswith('-') or a.lstrip('-').isdigit():
      args.files.append(a)
      continue
    if a == '--':
      args.files += aiter
      break
    argvar = next((k for k, v in ad.items() if a.lower() in v), None)
    if argvar is None:
      print_help(f' 💣  Unknown argument: jubsig {args.mode} {a}')
    var = getattr(args, argvar)
    if isinstance(var, list):
      try:
        var.append(next(aiter))
      except StopIteration:
        print_help(f' 💣  Argument parameter missing: jubsig {args.mode} {a} …')
    else:
      setattr(args, argvar, True)
  return args


def only(values, what: str) -> str:
  if len(values) != 1:
    raise ValueError(f"Exactly one {what} is required")
  return values[0]


def read_message(args) -> int:
  text = only(args.files, "message")
  try:
    m = int(text, 0)
  except ValueError:
    raise ValueError(f"Invalid message {text!r}, expected an integer") from None
  return message_fe(m).val


def main_keygen(args):
  with PrivateKey.random() as sk:
    print(f"Secret key: {encode_hex(bytes(sk))}")
    print(f"Public key: {encode_hex(encode_pk(sk.public()))}")


def main_pubkey(args):
  seed = decode_hex(only(args.identities, "secret key"), SEED_BYTES, "secret key")
  with PrivateKey(seed) as sk:
    print(encode_hex(encode_pk(sk.public())))


def main_sign(args):
  seed = decode_hex(only(args.identities, "secret key"), SEED_BYTES, "secret key")
  message = read_message(args)
  with PrivateKey(seed) as sk:
    print(encode_hex(encode_sig(sign(sk, message))))


def main_verify(args):
  pk = decode_hex(only(args.recipients, "public key"), PK_BYTES, "public key")
  sig = decode_hex(only(args.signatures, "signature"), SIG_BYTES, "signature")
  message = read_message(args)
  if not verify_bytes(pk, message, sig):
    raise ValueError("Signature mismatch")
  print("Signature OK")


modes = {
  "keygen": main_keygen,
  "pubkey": main_pubkey,
  "sign": main_sign,
  "verify": main_verify,
}


def main() -> NoReturn:
  """
  The main CLI entry point.

  System exit codes:
  * 0 The requested function was completed successfully
  * 1 CLI argument error
  * 2 Interrupted
  * 10 Invalid key, message or signature

  :raises SystemExit: on normal exit or any expected error, including KeyboardInterrupt
  :raises Exception: on unexpected error, or on any error with `--debug`
  """
  colorama.init()
  args = argparse()
  if args.debug:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    modes[args.mode](args)  # --debug makes us not catch errors
    sys.exit(0)
  try:
    modes[args.mode](args)
  except ValueError as e:
    sys.stderr.write(f"Error: {e}\n")
    sys.exit(10)
  except KeyboardInterrupt:
    sys.stderr.write("Interrupted.\n")
    sys.exit(2)
  sys.exit(0)
