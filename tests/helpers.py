from drawtopology.objects import Line, LineStyle, Wire, make_points


def line(line_id, *coords, style=LineStyle.SINGLE):
    return Line(id=line_id, points=make_points(*coords), style=style)


def wire(wire_id, *coords, net="", style=LineStyle.SINGLE, **kwargs):
    return Wire(id=wire_id, points=make_points(*coords), net=net, style=style, **kwargs)
