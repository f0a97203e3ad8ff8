
def is_yes(arg):
  return arg in ("y", "yes")

def confirm(question, check=is_yes, assume_yes=False):
  if assume_yes:
    return True
  response = input(f"{question} [y/N] ").strip().lower()
  return check(response)
