"""Pure domain rules (field validation) with no framework or storage imports."""
