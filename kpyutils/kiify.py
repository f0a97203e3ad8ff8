
from dataclasses import dataclass, is_dataclass, fields
import numbers
import yaml



@dataclass(frozen=True)
class KiSymbol:
  name: str

  def __kiify__(self, stream):
    stream.print_raw(f"#{self.name}")

  def __str__(self):
    return f"#{self.name}"


@dataclass(frozen=True)
class KiKeyword:
  name: str

  def __kiify__(self, stream):
    stream.print_raw(self.name)


NIL = KiKeyword("nil")


def escape_ki_string(delim, string):
  return string.replace("\\", "\\\\").replace("$", "\\$").replace(delim, "\\" + delim)



class TabbedShiftexStream():
  def __init__(self, stream, indents = 0):
    self.indents = indents
    self.stream = stream

  def indent(self):
    self.indents = self.indents + 1

  def dedent(self):
    self.indents = self.indents - 1

  def newline(self):
    self.print_raw("\n")
    self.print_raw("  " * self.indents)

  def print_raw(self, string):
    self.stream.write(string)



# prints python objects in kd notation (ki data), the way zdeclare shows
# topologies and pool descriptions to the user
class KdStream:
  def __init__(self, stream, level = -1):
    if not isinstance(stream, TabbedShiftexStream):
      stream = TabbedShiftexStream(stream)
    self.stream = stream
    self.level = level

  def print_obj(self, obj, nil=NIL):
    if self.level == 0:
      self.stream.print_raw("...")
      return
    self.level = self.level - 1
    if isinstance(obj, bool):
      self.stream.print_raw("yes" if obj else "no")
    elif isinstance(obj, str):
      self.stream.print_raw("\"")
      self.stream.print_raw(escape_ki_string('"', obj))
      self.stream.print_raw("\"")
    elif isinstance(obj, numbers.Number):
      self.stream.print_raw(str(obj))
    elif isinstance(obj, list):
      if len(obj) == 0:
        self.stream.print_raw("[]")
      else:
        self.stream.print_raw("[:")
        self.stream.indent()
        for element in obj:
          self.stream.newline()
          self.print_obj(element)
        self.stream.dedent()
    elif isinstance(obj, dict):
      self.stream.print_raw("{:")
      self.stream.indent()
      for key, value in obj.items():
        self.stream.newline()
        self.print_obj(key)
        self.stream.print_raw(": ")
        self.print_obj(value)
      self.stream.dedent()
    elif obj is None:
      self.print_obj(nil)
    elif hasattr(obj, "__kiify__") and callable(obj.__kiify__):
      obj.__kiify__(self)
    elif is_dataclass(obj):
      self.print_partial_obj(obj, [f.name for f in fields(obj) if not f.name.startswith("_")])
    else:
      self.stream.print_raw(str(obj))
    self.level = self.level + 1

  def print_raw(self, string):
    self.stream.print_raw(string)

  def newline(self):
    self.stream.newline()

  def print_property(self, obj, prop, hide_if_empty=False, nil=NIL):
    val = getattr(obj, prop)
    if hide_if_empty and not val:
      return
    self.stream.newline()
    self.stream.print_raw(f"{prop}: ")
    self.print_obj(val, nil=nil)

  def print_partial_obj(self, obj, props):
    self.stream.print_raw(type(obj).__name__)
    self.stream.indent()
    for prop in props:
      if hasattr(obj, prop):
        self.print_property(obj, prop, hide_if_empty=True)
    self.stream.dedent()


# turns the class into a dataclass that can be loaded from a yaml mapping tagged `!ClassName`
def yaml_data(cls):
  tag = "!" + cls.__name__

  def the_constr(loader, node):
    # deep, so nested sequences are complete before __post_init__ sees them
    values = loader.construct_mapping(node, deep=True)
    return cls(**values)
  def the_repr(dumper, data):
    return dumper.represent_yaml_object(tag, data, cls)

  yaml.add_constructor(tag, the_constr, Loader=yaml.FullLoader)
  yaml.add_representer(cls, the_repr)

  return dataclass(cls)



def is_yes_or_true(v):
  if v in ("yes", "true", "on"):
    return True
  return v is True

def to_yes(v):
  if is_yes_or_true(v):
    return "yes"
  else:
    return "no"
