from typing import Annotated

from beanery import Inject, component


class Quoter:
    pass


@component("reader")
class Reader:
    quoter: Annotated[Quoter, Inject()] = None
