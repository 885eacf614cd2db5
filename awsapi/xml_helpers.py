import xml.etree.ElementTree as ET


def _local_name(tag):
    # "{http://ec2.amazonaws.com/doc/2013-10-15/}Reservation" -> "Reservation"
    return tag.rsplit("}", 1)[-1]


def _child(element, name):
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def extract(body, selector):
    """
    Returns the text of the element at `selector` in the XML document `body`.

    The selector is a "/"-separated path of element names starting below the document root,
    namespaces are ignored. A leading root element name is accepted as well, so "Result/Value"
    and "Response/Result/Value" both select the same element of a <Response> document.

    :raises ValueError: body is not well-formed XML
    :raises KeyError: selected element does not exist
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise ValueError(f"Malformed XML response: {exc}") from exc

    names = [name for name in selector.split("/") if name]
    if names and names[0] == _local_name(root.tag) and _child(root, names[0]) is None:
        names = names[1:]

    element = root
    for name in names:
        element = _child(element, name)
        if element is None:
            raise KeyError(f"{selector}: element {name!r} not found")
    return element.text or ""
