from beanery import bean, component, configuration


class Quoter:
    pass


@component()
class HarryPotterQuoter(Quoter):
    pass


@configuration()
class QuoterConfiguration:
    @bean("harryPotterQuoter")
    def quoter(self) -> Quoter:
        return Quoter()
